"""
Framework Helper Functions
User-facing shortcuts
"""
from typing import Any, Dict, Optional


# ==============================================================================
# Response Helpers
# ==============================================================================

def view(template: Optional[str] = None, context: Optional[Dict[str, Any]] = None, **options: Any):
    """
    Create a view response builder

    Args:
        template: View name
        context: View variables
        **options: View constructor arguments (layout, theme, ...)

    Returns:
        ViewResponseBuilder instance

    Example:
        return await view('Pages/home', {'data': data})
    """
    from larabake.http import ViewResponseBuilder
    return ViewResponseBuilder(template, context, **options)


# ==============================================================================
# Mail Helpers
# ==============================================================================

def email(config: Optional[Dict[str, Any]] = None):
    """
    Create an email composer

    Example:
        await email({'transport': 'smtp'}).to('jane@example.com').subject('Hi').send('Hello Jane')
    """
    from larabake.mailer import Email
    return Email(config)
