from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ChatContext(BaseModel):
    lastTopic: Optional[str] = Field(None, description="上一轮的话题（截断后的用户输入）")
    prevUser: Optional[str] = Field(None, description="上一条用户消息")
    prevBot: Optional[str] = Field(None, description="上一条助手消息")
    isFollowUp: bool = Field(False, description="当前输入是否为追问（如 more / explain）")


class ChatRequest(BaseModel):
    message: Optional[str] = Field(None, description="用户输入（为空返回 400）")
    lang: Optional[str] = Field(None, description="语言提示：en / am / om；为空时自动识别")
    context: Optional[ChatContext] = Field(None, description="可选：浅上下文")


class ChatResponse(BaseModel):
    answer: str
    sources: List[Dict[str, Any]] = Field(default_factory=list)
    modelUsed: str = Field(..., description="safety / small-talk / faq-local / llm / fallback")
    lang: str
