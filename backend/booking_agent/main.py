"""
Booking Agent - Main FastAPI Application
Exposes the booking dialog over HTTP and keeps per-conversation history.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import uuid

from .agent.graph import build_default_agent
from .utils.config import settings
from .utils.logger import logger

# Initialize FastAPI app
app = FastAPI(
    title="Booking Agent",
    description="Conversational appointment booking with availability checks and nearest-slot suggestions",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

scheduling_agent = build_default_agent(settings)

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Booking Agent",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "components": {
            "api": "operational",
            "calendar": "configured" if settings.calendar_url else "empty",
            "extractor": "configured" if settings.gemini_api_key else "missing_api_key"
        },
        "policy": {
            "meeting_duration_minutes": settings.meeting_duration_minutes,
            "minimum_notice_minutes": settings.minimum_notice_minutes,
            "search_horizon_days": settings.search_horizon_days
        }
    }

@app.post("/api/chat")
async def chat(request: Request):
    """
    Handle one customer message.

    Request body:
        {
            "message": "string",
            "conversation_id": "string" (optional)
        }
    """
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")

    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    message = body.get("message")
    conversation_id = body.get("conversation_id") or str(uuid.uuid4())

    if not message or not str(message).strip():
        raise HTTPException(status_code=400, detail="message required")

    response = await scheduling_agent.run(conversation_id, str(message))
    state = scheduling_agent.store.get(conversation_id) or {}

    return {
        "conversation_id": conversation_id,
        "response": response,
        "state": {
            "phase": state.get("phase"),
            "desired_date": state.get("desired_date")
        }
    }

@app.get("/api/conversations/{conversation_id}")
async def get_conversation(conversation_id: str):
    """Return the stored transcript of a conversation."""
    state = scheduling_agent.store.get(conversation_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    return {
        "conversation_id": conversation_id,
        "phase": state.get("phase"),
        "desired_date": state.get("desired_date"),
        "messages": state.get("messages") or []
    }

@app.delete("/api/conversations/{conversation_id}")
async def reset_conversation(conversation_id: str):
    """Forget a conversation so the next message starts fresh."""
    if not scheduling_agent.store.delete(conversation_id):
        raise HTTPException(status_code=404, detail="Conversation not found")

    logger.info(f"Reset conversation {conversation_id}")
    return {"conversation_id": conversation_id, "status": "reset"}

@app.on_event("startup")
async def startup_event():
    """Log the active booking policy."""
    logger.info("Starting Booking Agent")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Meeting duration {settings.meeting_duration_minutes} min, "
        f"minimum notice {settings.minimum_notice_minutes} min"
    )

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "booking_agent.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
