import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ..logic.errors import BedrockServiceError
from ..logic.generator import FallbackGenerator
from ..schemas.bedrock import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generator(request: Request) -> FallbackGenerator:
    return request.app.state.generator


@router.post("/generate", response_model=GenerateResponse)
def generate(req: GenerateRequest, generator: FallbackGenerator = Depends(get_generator)):
    """Generate text from a prompt, falling back across the available models.

    Runs in FastAPI's threadpool; the Bedrock calls are blocking.
    """
    if not req.prompt:
        raise HTTPException(status_code=400, detail="Prompt is required")

    logger.info("Received prompt: %s", req.prompt[:100])

    try:
        result = generator.generate(
            req.prompt,
            preferred_model=req.model,
            max_tokens=req.max_tokens,
            temperature=req.temperature,
        )
    except BedrockServiceError as exc:
        logger.error("Error generating text: %s", exc)
        raise HTTPException(status_code=500, detail=f"Error generating response: {exc}") from exc

    return GenerateResponse(response=result.text, model_used=result.model_used)
