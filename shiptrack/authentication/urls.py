from django.urls import path

from . import api_views

app_name = 'authentication'

urlpatterns = [
    path('register', api_views.register, name='register'),
    path('login', api_views.login, name='login'),
    path('me', api_views.me, name='me'),
]
