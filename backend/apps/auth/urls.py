from django.urls import path
from .views import (
    AuthRegisterView,
    LoginView,
    RefreshView,
    AuthSessionView,
    LogoutView,
)

urlpatterns = [
    path("register/", AuthRegisterView.as_view(), name="auth-register"),
    path("login/", LoginView.as_view(), name="auth-login"),
    path("refresh/", RefreshView.as_view(), name="auth-refresh"),
    path("session/", AuthSessionView.as_view(), name="auth-session"),
    path("logout/", LogoutView.as_view(), name="auth-logout"),
]
