import os
import logging
from fastapi import APIRouter, HTTPException

from ..checker.analyzer import analyze_accessibility
from ..schemas import AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)

MAX_HTML_LENGTH = int(os.getenv("A11Y_MAX_HTML_LENGTH", "2000000"))

router = APIRouter(prefix="/api/accessibility", tags=["accessibility"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest):
    """Analyze a block of markup and return its accessibility compliance report."""
    html = request.html_content
    if len(html) > MAX_HTML_LENGTH:
        logger.warning("Rejected markup of %d chars (limit %d)", len(html), MAX_HTML_LENGTH)
        raise HTTPException(
            status_code=413,
            detail="HTML content exceeds the maximum length of {} characters.".format(MAX_HTML_LENGTH),
        )

    report = analyze_accessibility(html)
    return {
        "statusCode": 200,
        "success": True,
        "message": "Accessibility analysis completed.",
        "data": report,
    }
