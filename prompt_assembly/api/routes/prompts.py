from fastapi import APIRouter, Depends, HTTPException

from prompt_assembly.api.core.container import get_container
from prompt_assembly.api.schemas import (
    InputSchema,
    ProcessingErrorDetail,
    PromptTooLargeDetail,
    TemplateListResponse,
)
from prompt_assembly.core.errors import PromptProcessingError, PromptTooLargeError
from prompt_assembly.domain.assembler import InvocationInput, InvocationResult
from prompt_assembly.runtime.schema import describe_input_schema


router = APIRouter(prefix="/prompts", tags=["Prompts"])


@router.post(
    "/invoke",
    summary="Assemble a prompt",
    response_model=InvocationResult,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def invoke_prompt(
    payload: InvocationInput,
    container=Depends(get_container),
):
    try:
        return container.prompt_service.invoke(payload)
    except PromptTooLargeError as exc:
        detail = PromptTooLargeDetail(
            message=str(exc),
            estimated_tokens=exc.estimated_tokens,
            max_tokens=exc.max_tokens,
        )
        raise HTTPException(
            status_code=413,
            detail=detail.model_dump(by_alias=True),
        ) from exc
    except PromptProcessingError as exc:
        raise HTTPException(
            status_code=422,
            detail=ProcessingErrorDetail(message=str(exc)).model_dump(),
        ) from exc


@router.get("/schema", summary="Describe the accepted input shape")
def get_input_schema() -> InputSchema:
    return describe_input_schema()


@router.get("/templates", summary="List known template ids", response_model=TemplateListResponse)
def list_templates(container=Depends(get_container)):
    templates = container.prompt_service.assembler.config.templates
    return TemplateListResponse(templates=sorted(templates))
