"""
FastAPI application and API endpoints.
Layered: API -> service -> repository. DI for repositories, session store and services.
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, Optional

import pymysql
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

import config
from app import db
from app.auth import clear_session_cookie, get_current_user, get_session_id, set_session_cookie
from app.core.errors import ChatAppError
from app.core.health import check_live, check_ready
from app.core.settings import get_settings
from app.deps import get_auth_service, get_chat_service
from app.models import (
    AuthResponse,
    CredentialsRequest,
    RegisterRequest,
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    SubmitRequest,
    ThreadListResponse,
    ThreadMessagesResponse,
    ThreadSummary,
    UserInfo,
)
from app.repositories import create_session_store
from app.services.auth_service import AuthService
from app.services.chat_service import ChatService
from app.utils.request_logger import log_request

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: init DB, create the shared session store and drop expired sessions."""
    db.init_db()
    settings = get_settings()
    store = create_session_store(settings.session_store)
    if settings.session_store == "mysql" and not db.db_available:
        logger.warning("Session store is mysql but the database is unavailable; logins will fail")
    else:
        try:
            store.purge_expired()
        except pymysql.MySQLError as e:
            logger.warning("Could not purge expired sessions: %s", e)
    app.state.session_store = store
    if settings.session_secret == "change-me-in-production":
        logger.warning("SESSION_SECRET is not set; session cookies are signed with the default secret")
    yield


limiter = Limiter(key_func=get_remote_address)

app = FastAPI(
    title="ChatApp",
    description="Chat API with session authentication and per-user threads",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _normalize_detail(detail: object) -> list:
    """Convert FastAPI/HTTPException detail to list of strings for ErrorResponse."""
    if isinstance(detail, str):
        return [detail]
    if isinstance(detail, list):
        out = []
        for d in detail:
            if isinstance(d, str):
                out.append(d)
            elif isinstance(d, dict):
                out.append(d.get("msg", d.get("message", str(d))))
            else:
                out.append(str(d))
        return out if out else ["Error"]
    return [str(detail)]


def _with_request_id(request: Request, response: Response) -> Response:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return structured ErrorResponse for 4xx/5xx. Includes request_id when available."""
    details = _normalize_detail(exc.detail)
    body = ErrorResponse(
        code=str(exc.status_code),
        message=details[0] if details else "Error",
        details=[ErrorDetail(code=str(exc.status_code), message=d) for d in details],
    )
    payload = body.model_dump()
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        payload["request_id"] = request_id
    return _with_request_id(request, JSONResponse(status_code=exc.status_code, content=payload))


@app.exception_handler(ChatAppError)
def chat_app_error_handler(request: Request, exc: ChatAppError) -> PlainTextResponse:
    """Application errors go out as status code + plain-text message."""
    return _with_request_id(request, PlainTextResponse(exc.message, status_code=exc.status_code))


@app.exception_handler(pymysql.err.OperationalError)
def database_error_handler(request: Request, exc: pymysql.err.OperationalError) -> PlainTextResponse:
    logger.warning("Database error on %s: %s", request.url.path, exc)
    return _with_request_id(request, PlainTextResponse("Database unavailable", status_code=503))


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Set request_id on request.state and add X-Request-ID to response."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    """Add security-related headers to responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    log_request(request, response.status_code, latency_ms)
    return response


# ----- Auth -----

@app.post("/api/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user. 400 "Username already exists" when the name is taken."""
    user = auth.register(body.username, body.password)
    return AuthResponse(message="Registration successful", user=user)


@app.post("/api/login", response_model=AuthResponse)
def login(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    body: Optional[CredentialsRequest] = None,
):
    """Login with username and password. Sets the session cookie."""
    body = body or CredentialsRequest()
    record = auth.login(body.username, body.password)
    set_session_cookie(response, auth, record)
    user = auth.current_principal(record.id)
    return AuthResponse(message="Login successful", user=user)


@app.post("/api/logout", response_model=MessageResponse)
def logout(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    session_id: Annotated[Optional[str], Depends(get_session_id)],
):
    """Invalidate the current session (if any) and clear the cookie."""
    auth.logout(session_id)
    clear_session_cookie(response, auth)
    return MessageResponse(message="Logout successful")


@app.get("/api/user", response_model=UserInfo)
def current_user(user: Annotated[UserInfo, Depends(get_current_user)]):
    """Return the user owning the session cookie; 401 without a valid session."""
    return user


# ----- Chat (auth required, per-user) -----

@app.post("/api/chat", response_model=ThreadMessagesResponse)
@limiter.limit(config.RATE_LIMIT_CHAT)
def submit_message(
    request: Request,
    body: SubmitRequest,
    user: Annotated[UserInfo, Depends(get_current_user)],
    chat_svc: Annotated[ChatService, Depends(get_chat_service)],
):
    """Send a message. Without thread_id (or 0) a new thread is created."""
    request.state.thread_id = body.thread_id or None
    result = chat_svc.submit(user.id, body.thread_id, body.content)
    request.state.thread_id = result["thread_id"]
    return ThreadMessagesResponse(**result)


@app.get("/api/threads", response_model=ThreadListResponse)
def list_threads(
    user: Annotated[UserInfo, Depends(get_current_user)],
    chat_svc: Annotated[ChatService, Depends(get_chat_service)],
    limit: int = 50,
    offset: int = 0,
):
    """List current user's threads (most recently updated first). Paginated: limit (1-100), offset."""
    if limit < 1 or limit > 100:
        limit = 50
    if offset < 0:
        offset = 0
    items, total = chat_svc.list_threads(user.id, limit=limit, offset=offset)
    return ThreadListResponse(items=[ThreadSummary(**t) for t in items], total=total)


@app.get("/api/threads/{thread_id}/messages", response_model=ThreadMessagesResponse)
def get_thread_messages(
    thread_id: int,
    user: Annotated[UserInfo, Depends(get_current_user)],
    chat_svc: Annotated[ChatService, Depends(get_chat_service)],
):
    """Messages of one thread in creation order (user-scoped)."""
    messages = chat_svc.get_messages(user.id, thread_id)
    return ThreadMessagesResponse(thread_id=thread_id, messages=messages)


# ----- Health -----

@app.get("/health")
def health():
    """Simple health (backward compatible)."""
    return {"status": "ok"}


@app.get("/health/live")
def health_live():
    """Liveness: process is up."""
    return check_live()


@app.get("/health/ready")
def health_ready():
    """Readiness: DB reachable."""
    return check_ready()
