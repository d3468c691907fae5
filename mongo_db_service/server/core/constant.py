"""Application-wide constants."""

PROJECT_NAME = "mongo-db-service"
VERSION = "0.0.1"

# API base paths
API_V1_STR = "/api/v1"
BASE_API = f"{API_V1_STR}/spring-boot-mongo-db-service"
USERS_API = f"{BASE_API}/users"
ACTUATOR_PATH = "/actuator"

# Response statuses
STATUS_SUCCESS = "SUCCESS"
STATUS_ERROR = "ERROR"

# Response messages
MSG_USERS_FETCHED = "Users fetched successfully"
MSG_USER_FETCHED = "User fetched successfully"
MSG_USER_CREATED = "User created successfully"
MSG_USER_UPDATED = "User updated successfully"
MSG_USER_DELETED = "User deleted successfully"
