from django.urls import path
from . import views

urlpatterns = [
    path('audiences/size/', views.audience_size, name='audience-size'),
]
