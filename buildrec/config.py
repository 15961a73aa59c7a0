import os
CONFIG = {
    "FINGERPRINT_DB": os.getenv("BUILDREC_FINGERPRINT_DB", "buildrec_fingerprints.db"),
    "HISTORY_PATH": os.getenv("BUILDREC_HISTORY_PATH", "./logs/deployments.jsonl"),
    "LOCAL_REPOSITORY": os.getenv("BUILDREC_LOCAL_REPOSITORY", os.path.expanduser("~/.m2/repository")),
    "ROOT_URL": os.getenv("BUILDREC_ROOT_URL", "http://localhost:8080/"),
    "LOG_LEVEL": os.getenv("BUILDREC_LOG_LEVEL", "INFO"),
    "LOG_FILE": os.getenv("BUILDREC_LOG_FILE", ""),
}
