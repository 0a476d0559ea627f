import os

# PBKDF2 iteration counts above this are refused instead of computed
MAX_PBKDF2_ITERATIONS = int(os.getenv("PEMKEYS_MAX_PBKDF2_ITERATIONS", "10000000"))

LOG_LEVEL = os.getenv("PEMKEYS_LOG_LEVEL", "WARNING").upper()
