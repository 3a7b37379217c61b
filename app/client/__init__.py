"""Chat surface client: API client, composer and thread view."""

from app.client.api_client import ChatApiClient, ChatApiError
from app.client.composer import Composer
from app.client.thread_view import RenderedMessage, ThreadView, render_message

__all__ = [
    "ChatApiClient",
    "ChatApiError",
    "Composer",
    "RenderedMessage",
    "ThreadView",
    "render_message",
]
