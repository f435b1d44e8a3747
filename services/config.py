import os

from dotenv import load_dotenv

load_dotenv()

# Risk level thresholds, lower bound inclusive.
# URL and email scales are configured separately.
URL_MEDIUM_THRESHOLD = int(os.getenv("URL_MEDIUM_THRESHOLD", "25"))
URL_HIGH_THRESHOLD = int(os.getenv("URL_HIGH_THRESHOLD", "50"))

EMAIL_MEDIUM_THRESHOLD = int(os.getenv("EMAIL_MEDIUM_THRESHOLD", "30"))
EMAIL_HIGH_THRESHOLD = int(os.getenv("EMAIL_HIGH_THRESHOLD", "60"))
