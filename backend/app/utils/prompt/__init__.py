from .prompt_build import (
    FILE_CONTEXT_CHARS,
    GENERATE_SYSTEM_PROMPT,
    build_project_context,
    build_files_context,
    build_generate_prompt,
    build_explain_prompt,
    build_improve_prompt,
    build_tests_prompt,
)

__all__ = [
    "FILE_CONTEXT_CHARS",
    "GENERATE_SYSTEM_PROMPT",
    "build_project_context",
    "build_files_context",
    "build_generate_prompt",
    "build_explain_prompt",
    "build_improve_prompt",
    "build_tests_prompt",
]
