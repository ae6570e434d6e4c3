"""
Terminal Resume Backend

FastAPI application serving the content, chat and speech APIs and the
WebSocket terminal.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .ai_client import AIClient, AssistantAuthError
from .config import HOST, PORT, content_source
from .content_service import ContentService
from .models import (
    ChatRequest,
    ChatResponse,
    DirectoriesResponse,
    ErrorResponse,
    FilesResponse,
    SpeechRequest,
    SpeechResponse,
)
from .speech_service import SpeechService
from .terminal import TerminalSession, screen_payload

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Services (singletons, created on startup)
content_service: Optional[ContentService] = None
ai_client: Optional[AIClient] = None
speech_service: Optional[SpeechService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup and close them on shutdown."""
    global content_service, ai_client, speech_service
    content_service = ContentService()
    ai_client = AIClient()
    speech_service = SpeechService()
    logger.info(f"Terminal Resume starting on {HOST}:{PORT}")
    logger.info(f"Content source: {content_source()}")

    yield

    for service in (content_service, ai_client, speech_service):
        if service:
            await service.close()
    logger.info("Terminal Resume shut down")


app = FastAPI(
    title="Terminal Resume",
    description="Portfolio terminal with an AI assistant",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(exclude_none=True),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "Terminal Resume",
        "content_source": content_source(),
    }


# ============================================================================
# Content Endpoint
# ============================================================================

@app.get("/api/content")
async def get_content(
    directory: Optional[str] = Query(None, description="Content directory, e.g. 'Experience'"),
    file: Optional[str] = Query(None, description="Markdown filename inside the directory"),
):
    """
    Three modes: no parameters lists directories, `directory` lists its
    files, `directory` + `file` returns one parsed file.
    """
    try:
        if directory and file:
            result = await content_service.get_file(directory, file)
            return result.model_dump()
        if directory:
            files = await content_service.list_files(directory)
            return FilesResponse(files=files).model_dump(by_alias=True)
        directories = await content_service.list_directories()
        return DirectoriesResponse(directories=directories).model_dump()

    except Exception as e:
        logger.error(f"Content API error: {e}")
        return _error(500, "Failed to fetch content", str(e))


# ============================================================================
# Assistant Endpoint
# ============================================================================

@app.post("/api/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Ask Alex a question."""
    if not request.message or not request.message.strip():
        return _error(400, "Message is required")

    try:
        reply = await ai_client.ask(request.message)
    except AssistantAuthError as e:
        logger.error(f"AI chat error: {e}")
        return _error(401, str(e))

    logger.info(f"Chat completed ({len(request.message)} chars in, {len(reply)} chars out)")
    return ChatResponse(response=reply)


# ============================================================================
# Speech Endpoint
# ============================================================================

@app.post("/api/speech")
async def synthesize_speech(request: SpeechRequest):
    """Convert text to speech, returned as a data URI."""
    if not request.text or not request.text.strip():
        return _error(400, "Text is required")

    try:
        audio_url = await speech_service.synthesize(request.text)
    except RuntimeError as e:
        logger.error(f"Speech synthesis error: {e}")
        return _error(500, str(e))

    return SpeechResponse(audio_url=audio_url).model_dump(by_alias=True)


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom handler for HTTP exceptions."""
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Catch-all handler for unexpected errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error(500, "Internal server error", str(exc))


# ============================================================================
# Terminal WebSocket Endpoint
# ============================================================================

async def _send_screen(websocket: WebSocket, session: TerminalSession):
    await websocket.send_json(screen_payload(session))
    for effect in session.drain_effects():
        await websocket.send_json({"type": effect.kind, "data": effect.value})


@app.websocket("/ws/terminal")
async def terminal_websocket(websocket: WebSocket):
    """
    WebSocket endpoint for the terminal.
    Runs one TerminalSession per connection; the client sends
    {"type": "input", "data": "<text>"} and receives the redrawn screen.
    Messages keep being read while a command runs; input arriving during
    that time is dropped.
    """
    await websocket.accept()
    logger.info("Terminal WebSocket connection accepted")

    session = TerminalSession(content_service, ai_client, speech_service)
    await session.boot()
    await _send_screen(websocket, session)

    async def run_command(text: str):
        if await session.submit(text):
            await _send_screen(websocket, session)

    receiver: Optional[asyncio.Task] = None
    command: Optional[asyncio.Task] = None
    try:
        while not session.closed:
            if receiver is None:
                receiver = asyncio.ensure_future(websocket.receive_json())
            waiting = {receiver} if command is None else {receiver, command}
            done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)

            if command in done:
                command.result()
                command = None

            if receiver in done:
                message = receiver.result()
                receiver = None
                if not isinstance(message, dict) or message.get("type") != "input":
                    continue
                if command is not None or session.is_processing:
                    logger.info("Input dropped while a command is processing")
                    continue
                command = asyncio.ensure_future(run_command(message.get("data", "")))
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
        return
    finally:
        for task in (receiver, command):
            if task is not None and not task.done():
                task.cancel()

    await websocket.close()
    logger.info("Terminal WebSocket connection closed")


# ============================================================================
# Development Server
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "terminal_resume.main:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info",
    )
