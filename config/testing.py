SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
TOKEN_TTL_DAYS = 7

STORAGE_BACKEND = "memory"
DB_CONFIG = None

CHECKIN_CUTOFF = "09:15:00"
HALF_DAY_HOURS = 4.0

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
