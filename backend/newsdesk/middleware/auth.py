"""Global authentication middleware: every route needs a session cookie unless listed as public."""

import logging

import jwt
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from newsdesk.config import get_settings

logger = logging.getLogger(__name__)

# Routes that do not require authentication (prefix matching)
PUBLIC_ROUTES: list[str] = [
    "/",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/api/auth/login",
    "/api/auth/register",
    "/api/subscribe",
    "/api/stripe/create-checkout",
    "/api/checkout",
]


def _is_public(path: str) -> bool:
    """Check if a request path matches any public route (exact or prefix)."""
    for route in PUBLIC_ROUTES:
        if route == "/":
            if path == "/":
                return True
        elif path == route or path.startswith(route + "/"):
            return True
    return False


def _unauthenticated() -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "Not authenticated"})


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests to dashboard routes that carry no valid session cookie."""

    def __init__(self, app, **options):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return await call_next(request)

        if _is_public(request.url.path):
            return await call_next(request)

        # Tests inject a user through app.dependency_overrides; the per-route
        # dependency handles auth in that case.
        from newsdesk.auth.users import current_active_user  # noqa: E402

        if current_active_user in request.app.dependency_overrides:
            return await call_next(request)

        token = request.cookies.get(self.settings.cookie_access_token_name)
        if not token:
            return _unauthenticated()

        try:
            payload = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                audience=["fastapi-users:auth"],
            )
        except jwt.PyJWTError:
            return _unauthenticated()

        user_id = payload.get("sub")
        if user_id is None:
            return _unauthenticated()
        request.state.user_id = user_id

        return await call_next(request)
