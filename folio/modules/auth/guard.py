"""
Session Guard
=============

Gates the dashboard: a session must exist and its user must hold the admin
role. Evaluated once per dashboard mount or API request, never watched.
"""

from functools import wraps

from flask import jsonify

from ...core.errors import AuthenticationRequired, AuthorizationDenied, FolioError
from ...core.logging_service import LoggingService

AUTHORIZED = 'authorized'
UNAUTHENTICATED = 'unauthenticated'
FORBIDDEN = 'forbidden'

DENIAL_MESSAGE = "You don't have admin privileges."


class Authorization:
    def __init__(self, reason, session=None):
        self.reason = reason
        self.session = session

    @property
    def authorized(self):
        return self.reason == AUTHORIZED

    def raise_for_reason(self):
        if self.reason == UNAUTHENTICATED:
            raise AuthenticationRequired("Authentication required")
        if self.reason == FORBIDDEN:
            raise AuthorizationDenied(DENIAL_MESSAGE)

    def __repr__(self):
        return f"Authorization({self.reason!r})"


class SessionGuard:

    def __init__(self, auth, role='admin'):
        self.auth = auth
        self.role = role

    async def authorize(self):
        try:
            session = await self.auth.get_session()
        except FolioError as e:
            LoggingService.error('auth', "Session lookup failed", {'error': str(e)})
            session = None
        if session is None:
            return Authorization(UNAUTHENTICATED)

        try:
            allowed = await self.auth.has_role(session.user_id, self.role)
        except FolioError as e:
            LoggingService.error('auth', "Role lookup failed", {'error': str(e)})
            allowed = False
        if not allowed:
            LoggingService.log_security_event(
                "Dashboard access denied", {'role': self.role}, user_id=session.user_id
            )
            return Authorization(FORBIDDEN, session)

        return Authorization(AUTHORIZED, session)

    async def require(self):
        """Authorization for an allowed caller; raises otherwise"""
        result = await self.authorize()
        result.raise_for_reason()
        return result


def _guard():
    from ... import current_folio
    folio = current_folio()
    return SessionGuard(folio.auth, folio.admin_role)


def admin_api_required(f):
    """Decorator for admin JSON routes: 401/403 when not allowed"""
    @wraps(f)
    async def decorated_function(*args, **kwargs):
        try:
            await _guard().require()
        except (AuthenticationRequired, AuthorizationDenied) as e:
            return jsonify({'error': str(e)}), e.status_code
        return await f(*args, **kwargs)
    return decorated_function
