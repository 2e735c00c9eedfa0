import os

# Service endpoint and credentials (may be overridden by CLI or the UI)
DEFAULT_API_ROOT: str = "https://westus.api.cognitive.microsoft.com/face/v1.0"
API_ROOT: str = os.environ.get("EMOTION_API_ROOT", DEFAULT_API_ROOT).rstrip("/")
API_KEY: str = os.environ.get("EMOTION_API_KEY", "")
AUTH_HEADER: str = "Ocp-Apim-Subscription-Key"

# Seconds; detection on large images can be slow
TIMEOUT: float = float(os.environ.get("EMOTION_API_TIMEOUT", "60"))
CHUNK_SIZE: int = 64 * 1024

DETECT_PATH: str = "/detect?returnFaceAttributes=emotion"

# Local credential storage
STORE_DIR: str = os.environ.get("EMOTION_SDK_HOME", os.path.join(os.path.expanduser("~"), ".emotion_sdk"))
STORE_FILE: str = "subscription.txt"

KEY_PROMPT: str = "Paste your subscription key here firstly"
ENDPOINT_PROMPT: str = "Paste your EndPoint here to start"
SIGNUP_URL: str = "https://azure.microsoft.com/try/cognitive-services/"
