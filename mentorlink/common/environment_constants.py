import os

LOG_LEVEL = "LOG_LEVEL"

DATABASE_URL = os.getenv("DATABASE_URL")

JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE")

MENTORSHIP_DEFAULT_PERIOD_MONTHS = int(
    os.getenv("MENTORSHIP_DEFAULT_PERIOD_MONTHS", "3")
)
