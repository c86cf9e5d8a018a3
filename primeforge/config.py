import os

# Miller-Rabin rounds per candidate; false-positive bound is 4^-ROUNDS
ROUNDS = int(os.getenv("PRIMEFORGE_ROUNDS", "10"))

# Search time-box before the RNG is reseeded (seconds)
NARROW_TIME_LIMIT_S = float(os.getenv("PRIMEFORGE_NARROW_TIME_LIMIT_S", "60"))
WIDE_TIME_LIMIT_S   = float(os.getenv("PRIMEFORGE_WIDE_TIME_LIMIT_S", "120"))

# Progress callback cadence in wide mode (attempts); narrow mode reports nothing
WIDE_PROGRESS_EVERY = int(os.getenv("PRIMEFORGE_WIDE_PROGRESS_EVERY", "100"))

# 0 => unbounded search
MAX_ATTEMPTS = int(os.getenv("PRIMEFORGE_MAX_ATTEMPTS", "0"))

NARROW_OUT = os.getenv("PRIMEFORGE_NARROW_OUT", "prime.txt")
WIDE_OUT   = os.getenv("PRIMEFORGE_WIDE_OUT", "prime1024.txt")

# Largest bit length the HTTP API generates inline; bigger requests go through the queue
SYNC_MAX_BITS = int(os.getenv("PRIMEFORGE_SYNC_MAX_BITS", "64"))

LOG_PATH  = os.getenv("PRIMEFORGE_LOG", "")
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
