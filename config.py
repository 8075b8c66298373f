import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./garage_billing.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Document pricing defaults
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "TZS")
    SUPPORTED_CURRENCIES = data.get("SUPPORTED_CURRENCIES", ["TZS", "USD"])
    DEFAULT_TAX_PERCENT = data.get("DEFAULT_TAX_PERCENT", 18)  # VAT, percent
    DEFAULT_LABOR_RATE = data.get("DEFAULT_LABOR_RATE", 50.00)  # per hour
    ESTIMATE_TERMS = data.get("ESTIMATE_TERMS", "Quote valid for 30 days.")
    INVOICE_TERMS = data.get("INVOICE_TERMS", "Payment due within 7 days.")

    # Printed documents
    COMPANY_NAME = data.get("COMPANY_NAME", "Garage Workshop")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "Main Workshop")
    RECEIVER_TILL_NUMBER = data.get("RECEIVER_TILL_NUMBER", "123456 (Business Till)")
