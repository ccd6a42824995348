"""FastAPI prompt assembly service.

Exposes the assembler to other services:
- callers post a template id or raw prompt, variables and context
- the service returns the finalized prompt with size metadata
- oversized prompts are rejected with both token counts so callers can trim
"""

from __future__ import annotations

from fastapi import FastAPI

from prompt_assembly.api.routes import register_routes

tags_metadata = [
    {
        "name": "Prompts",
        "description": "Assemble prompts from templates, variables and context"
    },
]

app = FastAPI(
    title='Prompt Assembly Service',
    version='1.0.0',
    description='Renders prompts ready to send to a language model',
    openapi_tags=tags_metadata
)

# Register all API routes
register_routes(app)
