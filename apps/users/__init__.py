"""Users app package.

Defines the back-office account model (email login, USER/ADMIN roles)
and the JWT login flow. Use ``apps.users.models.CustomUser`` as the
AUTH_USER_MODEL throughout the project.
"""
