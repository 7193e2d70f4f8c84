"""
MJML Email Templates
Each template returns MJML markup; email_service compiles it to HTML
"""

from typing import Optional

BRAND_NAME = "Worship Set Manager"

COLORS = {
    "accent": "#7c3aed",
    "page": "#f5f3ff",
    "card": "#ffffff",
    "heading": "#1e1b4b",
    "body": "#3f3f46",
    "note": "#71717a",
}

FONT_STACK = "Helvetica, Arial, sans-serif"


def _paragraph(text: str, muted: bool = False) -> str:
    color = COLORS["note"] if muted else COLORS["body"]
    size = "13px" if muted else "15px"
    return f'<mj-text color="{color}" font-size="{size}">{text}</mj-text>'


def _action_button(url: str, label: str) -> str:
    return (
        f'<mj-button href="{url}" background-color="{COLORS["accent"]}" '
        f'border-radius="6px" inner-padding="14px 32px" font-weight="bold">{label}</mj-button>'
    )


def render_layout(heading: str, preview: str, blocks: list[str], action: Optional[tuple[str, str]] = None) -> str:
    """Wrap content blocks in the shared card layout; action is a (url, label) pair"""
    body = "\n".join(blocks)
    if action:
        body += "\n" + _action_button(*action)

    return f"""
<mjml>
  <mj-head>
    <mj-title>{heading}</mj-title>
    <mj-preview>{preview}</mj-preview>
    <mj-attributes>
      <mj-all font-family="{FONT_STACK}" />
      <mj-text line-height="1.5" />
    </mj-attributes>
  </mj-head>
  <mj-body background-color="{COLORS['page']}">
    <mj-section padding="24px 0 0 0">
      <mj-column>
        <mj-text align="center" font-weight="bold" color="{COLORS['accent']}">{BRAND_NAME}</mj-text>
      </mj-column>
    </mj-section>
    <mj-section background-color="{COLORS['card']}" border-radius="10px" padding="32px">
      <mj-column>
        <mj-text font-size="22px" font-weight="bold" color="{COLORS['heading']}">{heading}</mj-text>
        {body}
      </mj-column>
    </mj-section>
  </mj-body>
</mjml>
"""


def password_reset_template(reset_link: str, expiry_minutes: int = 60) -> str:
    return render_layout(
        heading="Reset your password",
        preview=f"Reset your {BRAND_NAME} password",
        blocks=[
            _paragraph("Someone asked to reset the password on your account. Pick a new one with the button below."),
            _paragraph(
                f"The link works once and expires after {expiry_minutes} minutes. "
                "If this wasn't you, no action is needed.",
                muted=True,
            ),
        ],
        action=(reset_link, "Choose a new password"),
    )
