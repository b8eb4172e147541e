"""AI insight endpoints: news, article summaries, recommendations, chat."""
from fastapi import APIRouter, Depends, HTTPException
import logging

from finnolan.api.dependencies import (
    get_chat_service,
    get_news_service,
    get_recommendation_service,
    get_summarizer,
)
from finnolan.api.schemas import (
    ERROR_RESPONSES,
    ChatRequest,
    ChatResponse,
    NewsRequest,
    SuggestionRequest,
    SummarizeRequest,
)
from finnolan.domain.entities import ArticleSummary, NewsDigest, StockAnalysis
from finnolan.domain.exceptions import FinnolanError
from finnolan.services.chat_service import ChatService
from finnolan.services.news_service import NewsService
from finnolan.services.recommendation_service import RecommendationService
from finnolan.services.summarizer_service import ArticleSummarizer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["insights"], responses=ERROR_RESPONSES)


@router.post("/news", response_model=NewsDigest)
async def fetch_news(
    body: NewsRequest,
    service: NewsService = Depends(get_news_service),
) -> NewsDigest:
    """Search news and summarize each article."""
    try:
        return await service.search(body.query, body.language)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error in news search: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/summarize", response_model=ArticleSummary)
async def summarize_article(
    body: SummarizeRequest,
    service: ArticleSummarizer = Depends(get_summarizer),
) -> ArticleSummary:
    """Summarize the article at a URL."""
    try:
        return await service.summarize(body.url)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error summarizing {body.url}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/suggestions", response_model=StockAnalysis)
async def stock_suggestions(
    body: SuggestionRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> StockAnalysis:
    """Quote plus AI recommendation for a symbol."""
    try:
        return await service.analyze(body.symbol)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error in stock suggestions for {body.symbol}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Reply to the latest user message in a transcript."""
    try:
        reply = await service.reply([m.model_dump() for m in body.messages])
        return ChatResponse(reply=reply)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error in chat: {e}")
        raise HTTPException(status_code=500, detail=str(e))
