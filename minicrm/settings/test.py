from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-only-not-secure"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Run delivery tasks inline; failures stay inside the EagerResult
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

CAMPAIGN_DELIVERY_SIMULATOR = "apps.campaigns.delivery.RandomDeliverySimulator"
CAMPAIGN_DELIVERY_OPTIONS = {"success_rate": 1.0}
