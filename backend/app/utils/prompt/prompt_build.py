"""
Prompt templates for the code assistant capabilities.
"""

from typing import Iterable, Optional

FILE_CONTEXT_CHARS = 1000
TRUNCATION_MARKER = "\n... (truncated)"

GENERATE_SYSTEM_PROMPT = """You are an expert full-stack developer helping to build modern web applications. You have expertise in:

- React/TypeScript with modern hooks and patterns
- Node.js/Express.js and Python backend development
- PostgreSQL database design
- Modern CSS with Tailwind
- REST API design
- Security best practices

When generating code:
- Use TypeScript for React components
- Use functional components with hooks
- Include proper error handling
- Add helpful comments
- Follow modern best practices
- Use Tailwind CSS for styling
- Make code production-ready

Always provide complete, functional code that can be used immediately."""

GENERATE_INSTRUCTIONS = """Please generate clean, functional, and modern code. If creating React components:
- Use TypeScript
- Use functional components with hooks
- Include proper typing
- Use Tailwind CSS for styling
- Add error handling
- Follow React best practices

If creating backend code:
- Use proper error handling
- Include input validation
- Use async/await
- Add helpful logging

If modifying existing code, please provide the complete updated file content.

Respond with just the code, no explanations or markdown formatting unless specifically requested."""


def build_project_context(name: str, description: Optional[str], template_used: Optional[str]) -> str:
    """One-paragraph summary of a project for the generation prompt"""
    return (
        f"Project: {name}\n"
        f"Description: {description or 'No description'}\n"
        f"Template: {template_used or 'None'}"
    )


def build_files_context(files: Iterable) -> str:
    """
    Render existing project files, each cut to its first FILE_CONTEXT_CHARS characters.

    Args:
        files: objects with file_path and content attributes
    """
    sections = []
    for file in files:
        content = file.content or ""
        if len(content) > FILE_CONTEXT_CHARS:
            content = content[:FILE_CONTEXT_CHARS] + TRUNCATION_MARKER
        sections.append(f"\n--- {file.file_path} ---\n{content}\n")
    if not sections:
        return ""
    return "\n\nExisting project files:\n" + "".join(sections)


def build_generate_prompt(prompt: str, project_context: str = "", files: Iterable = ()) -> str:
    """User prompt for code generation"""
    header = f"Project Context: {project_context}\n\n" if project_context else ""
    return f"{header}{build_files_context(files)}\n\nUser Request: {prompt}\n\n{GENERATE_INSTRUCTIONS}"


def build_explain_prompt(code: str, language: str = "javascript") -> str:
    return f"""Please explain this {language} code in simple terms:

{code}

Explain:
1. What it does (main purpose)
2. How it works (key concepts)
3. Important parts to understand
4. Any best practices demonstrated
5. Potential improvements or considerations

Make it beginner-friendly but thorough."""


def build_improve_prompt(code: str, context: str = "") -> str:
    header = f"Context: {context}\n\n" if context else ""
    return f"""Please analyze this code and suggest improvements:

{header}{code}

Please provide:
1. Code quality improvements
2. Performance optimizations
3. Security considerations
4. Best practices recommendations
5. Accessibility improvements (if UI code)
6. Error handling enhancements

Format as a structured response with specific, actionable suggestions."""


def build_tests_prompt(code: str, framework: str = "jest") -> str:
    return f"""Generate comprehensive tests for this code using {framework}:

{code}

Please include:
1. Unit tests for all functions
2. Edge cases and error conditions
3. Mock external dependencies if needed
4. Integration tests where appropriate
5. Clear test descriptions
6. Proper setup and teardown

Provide complete, runnable test code."""
