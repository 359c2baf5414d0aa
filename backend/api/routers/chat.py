# api/routers/chat.py
# -*- coding: utf-8 -*-

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_answer_service
from api.schemas.chat import ChatRequest, ChatResponse
from settings.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest, service=Depends(get_answer_service)):
    """
    聊天组件的远端问答入口。
    组件端只读 answer 字段；请求失败时组件回退到本地规则。
    """
    message = (req.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        context = req.context.model_dump() if req.context else {}
        result = service.answer(message, lang_hint=req.lang, context=context)
        return ChatResponse(**result)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("chat answer failed")
        raise HTTPException(status_code=500, detail=str(e))
