"""
Message generation API routes.
"""
from fastapi import APIRouter, Depends

from outflo.api.deps import get_message_generator
from outflo.services.message_service import MessageGenerator
from outflo.schemas.common import ApiResponse, ErrorResponse
from outflo.schemas.message import MessageRequest, MessageResponse

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "/generate-message",
    response_model=ApiResponse[MessageResponse],
    responses={500: {"model": ErrorResponse}}
)
async def generate_message(
    message_request: MessageRequest,
    generator: MessageGenerator = Depends(get_message_generator)
):
    """Generate a personalized LinkedIn outreach message."""
    text = await generator.generate(message_request)
    return ApiResponse(
        message="Message generated successfully",
        data=MessageResponse(response=text)
    )
