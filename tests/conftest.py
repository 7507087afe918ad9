import os

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("REQUIRE_API_KEY", "false")
