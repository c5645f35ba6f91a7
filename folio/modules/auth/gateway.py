"""
Session Auth Gateway
====================

Sessions live in the signed Flask cookie session as a user id; users and
role assignments are records in the record store.
"""

from flask import session
from werkzeug.security import check_password_hash, generate_password_hash

from ...core.errors import ValidationError
from ...core.gateways import AuthGateway, Session
from ...core.logging_service import LoggingService


class SessionAuthGateway(AuthGateway):

    def __init__(self, data):
        self.data = data

    async def _find_user(self, **filters):
        users = await self.data.list('users', filters=filters)
        return users[0] if users else None

    async def get_session(self):
        user_id = session.get('user_id')
        if not user_id:
            return None

        user = await self._find_user(id=user_id)
        if user is None:
            # Cookie outlived the user record
            session.pop('user_id', None)
            session.pop('user_email', None)
            return None
        return Session(user['id'], user['email'])

    async def sign_in(self, email, password):
        """Verify credentials and establish the session; None on bad credentials"""
        email = (email or '').strip().lower()
        user = await self._find_user(email=email) if email else None
        if user is None or not check_password_hash(user['password_hash'], password or ''):
            LoggingService.log_security_event("Failed sign-in", {'email': email})
            return None

        session['user_id'] = user['id']
        session['user_email'] = user['email']
        LoggingService.log_user_action('auth', 'sign in', user_id=user['id'])
        return Session(user['id'], user['email'])

    async def sign_out(self):
        user_id = session.pop('user_id', None)
        session.pop('user_email', None)
        if user_id:
            LoggingService.log_user_action('auth', 'sign out', user_id=user_id)

    async def has_role(self, user_id, role):
        roles = await self.data.list('user_roles', filters={'user_id': user_id, 'role': role})
        return bool(roles)


async def create_user(data, email, password, roles=()):
    """Insert a user plus its role assignments; returns the stored user"""
    email = (email or '').strip().lower()
    if not email or not password:
        raise ValidationError("Email and password are required")
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")

    user = await data.insert('users', {
        'email': email,
        'password_hash': generate_password_hash(password),
    })
    for role in roles:
        await data.insert('user_roles', {'user_id': user['id'], 'role': role})
    return user
