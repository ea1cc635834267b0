from typing import Dict, List
from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    html_content: str


class IssueDetail(BaseModel):
    suggested_fix: str = Field(alias="suggestedFix")
    faulted_snippet: str = Field(alias="faultedSnippet")
    sample_snippet: str = Field(alias="sampleSnippet")
    model_config = {"populate_by_name": True}


class IssueGroup(BaseModel):
    title: str
    line: int = Field(ge=0)
    details: List[IssueDetail]


class AccessibilityReport(BaseModel):
    compliance_score: int = Field(alias="complianceScore", ge=0, le=100)
    issues: Dict[str, IssueGroup] = {}
    model_config = {"populate_by_name": True}


class AnalyzeResponse(BaseModel):
    status_code: int = Field(200, alias="statusCode")
    success: bool = True
    message: str
    data: AccessibilityReport
    model_config = {"populate_by_name": True}
