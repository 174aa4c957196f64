from minicrm.celery import app as celery_app

__all__ = ('celery_app',)

# Register tasks explicitly
from .delivery import simulate_campaign_delivery  # noqa: E402,F401
