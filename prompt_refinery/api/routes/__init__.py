"""API routes."""

from fastapi import APIRouter

from prompt_refinery.api.routes import prompt_chat

api_router = APIRouter()

# Protected routes (auth required)
api_router.include_router(prompt_chat.router, tags=["prompt-chat"])
