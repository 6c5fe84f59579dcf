"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"


def container_widget_id(container_id: str) -> str:
    """Widget ID of the panel showing a container (tier or bank)."""
    return f"container-{container_id}"


# Header IDs
HEADER_CONTAINER = "header-container"
HEADER_TITLE = "header-title"
TEMPLATE_LABEL = "template-label"
SESSION_LABEL = "session-label"
TEMPLATES_BTN = "templates-btn"
NEW_TEMPLATE_BTN = "new-template-btn"
SAVE_LIST_BTN = "save-list-btn"
SAVED_LISTS_BTN = "saved-lists-btn"
SIGN_IN_BTN = "sign-in-btn"

# Board IDs
BOARD = "board"
TIER_ROWS = "tier-rows"
BANK_SECTION = "bank-section"
DRAG_GHOST = "drag-ghost"

# Footer IDs
FOOTER = "footer-bar"
STATUS_BAR = "status-bar"

# Modal IDs
MODAL_TITLE = "modal-title"
MODAL_BUTTONS = "modal-buttons"
MODAL_LIST = "modal-list"
CANCEL_BTN = "cancel-btn"
CONFIRM_BTN = "confirm-btn"
TEMPLATE_SEARCH_INPUT = "template-search-input"
TEMPLATE_NAME_INPUT = "template-name-input"
TEMPLATE_FILES_INPUT = "template-files-input"
TEMPLATE_PUBLIC_CHECK = "template-public-check"
LIST_NAME_INPUT = "list-name-input"
LIST_PUBLIC_CHECK = "list-public-check"
SCOPE_BTN = "scope-btn"
TOKEN_INPUT = "token-input"
