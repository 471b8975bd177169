"""Invitation email content."""

from datetime import datetime

from greyn.domain.service.notification import InvitationNotice
from greyn.domain.value import AccountRole

ROLE_LABELS: dict[AccountRole, str] = {
    AccountRole.INVESTOR: "Investor",
    AccountRole.NGO: "NGO",
    AccountRole.CORPORATE: "Corporate",
    AccountRole.MARKET_PARTICIPANT: "Market Participant",
    AccountRole.ADMIN: "Administrator",
}


def invitation_subject(platform_name: str) -> str:
    return f"Invitation to Join {platform_name}"


def _expiry_date(expires_at: datetime) -> str:
    return expires_at.strftime("%B %d, %Y")


def render_invitation_text(notice: InvitationNotice, link: str, platform_name: str) -> str:
    """Plain-text body of an invitation email."""
    role = ROLE_LABELS[notice.role]
    expires = _expiry_date(notice.expires_at)
    return (
        f"You're invited to {platform_name}!\n"
        "\n"
        f"You have been invited to join the {notice.portal.value} portal as a {role}.\n"
        "\n"
        "Invitation details:\n"
        f"- Invitation code: {notice.invitation_code}\n"
        f"- Role: {role}\n"
        f"- Portal: {notice.portal.value}\n"
        f"- Expires: {expires}\n"
        "\n"
        f"Accept your invitation: {link}\n"
        "\n"
        f"Note: This invitation will expire on {expires}.\n"
    )


def render_invitation_html(notice: InvitationNotice, link: str, platform_name: str) -> str:
    """HTML body of an invitation email."""
    role = ROLE_LABELS[notice.role]
    expires = _expiry_date(notice.expires_at)
    return f"""
    <h2>You're invited to {platform_name}!</h2>
    <p>You have been invited to join the <strong>{notice.portal.value}</strong> portal
    as a <strong>{role}</strong>.</p>
    <ul>
      <li><strong>Invitation code:</strong> {notice.invitation_code}</li>
      <li><strong>Role:</strong> {role}</li>
      <li><strong>Portal:</strong> {notice.portal.value}</li>
      <li><strong>Expires:</strong> {expires}</li>
    </ul>
    <p><a href="{link}">Accept Invitation</a></p>
    <p>Or copy and paste this link into your browser:</p>
    <p>{link}</p>
    <p><strong>Note:</strong> This invitation link will expire on {expires}.</p>
    """
