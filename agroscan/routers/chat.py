import logging
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from agroscan.core.config import CHAT_HISTORY_LIMIT
from agroscan.models.schemas import ChatRequest, ChatResponse, ChatHistoryResponse
from agroscan.services import chat_service
from agroscan.services.advisor_service import CHAT_FALLBACK, respond

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat_with_ai(request: ChatRequest):
    if not request.message or not request.user_id:
        raise HTTPException(status_code=400, detail="Message and userId required")

    try:
        session_id = await chat_service.get_or_create_session(request.user_id)

        # History is read before the new message is stored
        history = await chat_service.get_recent_turns(request.user_id, CHAT_HISTORY_LIMIT)

        await chat_service.save_message(session_id, request.user_id, request.message, chat_service.USER_SENDER)

        # The completion call blocks on the network
        ai_response = await run_in_threadpool(respond, history, request.message)

        await chat_service.save_message(session_id, request.user_id, ai_response, chat_service.AI_SENDER)

        return ChatResponse(aiResponse=ai_response)
    except Exception as e:
        logger.error(f"/chat error for user {request.user_id}: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"aiResponse": CHAT_FALLBACK})


@router.get("/api/chat/history/{user_id}", response_model=ChatHistoryResponse)
async def get_chat_history(
    user_id: str,
    limit: int = Query(10, ge=1),
    offset: int = Query(0, ge=0)
):
    try:
        rows, total = await chat_service.get_history_page(user_id, limit, offset)

        return ChatHistoryResponse(
            history=rows,
            hasMore=offset + len(rows) < total
        )
    except Exception as e:
        logger.error(f"Chat history error for user {user_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch chat history")


@router.delete("/api/chat/clear/{user_id}")
async def clear_chat_history(user_id: str):
    try:
        deleted = await chat_service.clear_history(user_id)
        logger.info(f"Cleared {deleted} chat messages for user {user_id}")
        return {"success": True, "deletedCount": deleted}
    except Exception as e:
        logger.error(f"Clear chat error for user {user_id}: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to clear chats"})
