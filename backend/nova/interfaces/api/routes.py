import logging
from typing import AsyncIterator, List, Optional

from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse

from ...domain.entities import (
    ChatMessage,
    ChatSession,
    ChatRequest,
    ChatReply,
    ChatErrorReply,
    SessionSummary,
)
from ...domain.repositories import SessionRepository
from ...config import get_settings, Settings
from ...infrastructure.llm_providers import BaseLLMProvider, GeminiProvider
from ...infrastructure.persistence import InMemorySessionRepository
from ...application.services import ChatService
from ...application.services.chat_service import STREAM_INTERRUPTED_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

APOLOGY_MESSAGE = (
    "I'm sorry, but I'm experiencing technical difficulties. Please try again later."
)

# Dependency injection
_provider = None
_chat_service = None
_session_repository = None


def get_provider(settings: Settings = Depends(get_settings)) -> BaseLLMProvider:
    global _provider
    if _provider is None:
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set; every chat will get a fallback reply")
        _provider = GeminiProvider(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.request_timeout,
        )
    return _provider


def get_chat_service(settings: Settings = Depends(get_settings)) -> ChatService:
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService(
            provider=get_provider(settings),
            window=settings.history_window,
        )
    return _chat_service


def get_session_repository() -> SessionRepository:
    global _session_repository
    if _session_repository is None:
        _session_repository = InMemorySessionRepository()
    return _session_repository


def _apology_stream() -> StreamingResponse:
    async def body():
        yield APOLOGY_MESSAGE

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")


async def _relay(
    chat_service: ChatService,
    request: ChatRequest,
    history: list[ChatMessage],
    sessions: SessionRepository,
    session_id: Optional[str],
) -> AsyncIterator[str]:
    parts: list[str] = []
    try:
        async for chunk in chat_service.stream_reply(request.message, history, session_id):
            parts.append(chunk)
            yield chunk
    except Exception:
        # Headers are already sent, so the only thing left is to say sorry in-band
        logger.exception("Chat stream failed")
        apology = STREAM_INTERRUPTED_MESSAGE if parts else APOLOGY_MESSAGE
        parts.append(apology)
        yield apology

    if session_id:
        try:
            await sessions.append(
                session_id, ChatMessage(role="assistant", content="".join(parts))
            )
        except ValueError:
            logger.exception("Could not store streamed reply in session %s", session_id)


@router.post("/chat")
async def chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Send a message to Nova.

    Replies with JSON ``{response, timestamp}``, or with a plain text stream
    when ``stream`` is true. Failures still answer 200 with an apology so the
    UI can show it as a normal assistant message.
    """
    wants_stream = False
    try:
        body = await request.json()
        if isinstance(body, dict):
            wants_stream = body.get("stream") is True

        chat_request = ChatRequest.model_validate(body)
        if not chat_request.message.strip():
            return JSONResponse(status_code=400, content={"error": "Message is required"})

        history = list(chat_request.chat_history)
        session_id = None
        if chat_request.session_id:
            session = await sessions.get(chat_request.session_id)
            if session is not None:
                session_id = session.session_id
                if not history:
                    history = list(session.messages)
                await sessions.append(
                    session_id, ChatMessage(role="user", content=chat_request.message)
                )

        if chat_request.stream:
            return StreamingResponse(
                _relay(chat_service, chat_request, history, sessions, session_id),
                media_type="text/plain; charset=utf-8",
            )

        text = await chat_service.reply(chat_request.message, history, session_id)
        reply = ChatReply(response=text)
        if session_id:
            await sessions.append(
                session_id,
                ChatMessage(role="assistant", content=text, timestamp=reply.timestamp),
            )
        return reply

    except Exception:
        logger.exception("Chat API error")
        if wants_stream:
            return _apology_stream()
        return ChatErrorReply(error="Failed to generate response", response=APOLOGY_MESSAGE)


@router.get("/sessions", response_model=List[SessionSummary])
async def list_sessions(sessions: SessionRepository = Depends(get_session_repository)):
    """List chat sessions for the sidebar, most recent first"""
    return [SessionSummary.from_session(s) for s in await sessions.get_all()]


@router.post("/sessions", response_model=ChatSession, status_code=201)
async def create_session(sessions: SessionRepository = Depends(get_session_repository)):
    """Start a new, empty chat session"""
    return await sessions.create()


@router.get("/sessions/{session_id}", response_model=ChatSession)
async def get_session(
    session_id: str,
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Get a chat session with all of its turns"""
    session = await sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.delete("/sessions/{session_id}")
async def delete_session(
    session_id: str,
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Forget a chat session"""
    deleted = await sessions.delete(session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Session deleted successfully"}


@router.get("/health")
async def health_check(provider: BaseLLMProvider = Depends(get_provider)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "provider": provider.provider_id,
        "model": provider.model,
        "providerConfigured": await provider.is_available(),
    }
