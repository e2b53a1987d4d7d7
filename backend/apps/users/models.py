from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    # id, username, password, is_active, is_staff, is_superuser, groups, user_permissions are inherited
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    image = models.URLField(max_length=500, blank=True)
    email_verified = models.DateTimeField(blank=True, null=True)

    def __str__(self):
        return self.name or self.username
