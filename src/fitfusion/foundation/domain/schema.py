"""Document-store collection and field names (schema-in-code).

The store has no DDL, no foreign keys and no cascades. These constants are
the single source of truth for where each record lives and which stored
field references which owner.
"""

# Owner records: users/{ownerId}
COLLECTION_USERS = "users"
# Profile records: clients/{ownerId}, 1:1 with a client owner
COLLECTION_CLIENTS = "clients"
# Dependent records: routines/{id}, reference owners by stored id
COLLECTION_ROUTINES = "routines"

FIELD_ROLE = "role"
FIELD_TRAINER_ID = "trainerId"
FIELD_CLIENT_ID = "clientId"
FIELD_IS_PUBLIC = "isPublic"
FIELD_PUBLIC_TOKEN = "publicToken"
FIELD_PUBLIC_EXPIRES_AT = "publicExpiresAt"
FIELD_CREATED_AT = "createdAt"
FIELD_UPDATED_AT = "updatedAt"
