from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel
from html import escape
import re

NOT_PROVIDED = "Not provided"
CRISIS_SUBJECT = "Need Help/Crisis"

CELL_STYLE = "padding: 8px; border: 1px solid #ddd;"


class Callout(BaseModel):
    label: str
    text: str
    color: str

    def to_html(self) -> str:
        return f"""
              <div style="background: {self.color}; color: white; padding: 15px; border-radius: 5px; margin-top: 20px;">
                <strong>{self.label}</strong> {self.text}
              </div>"""


class FormTemplate(BaseModel):
    subject: str
    heading: str
    intro: str
    callout: Optional[Callout] = None
    # formData のこのフィールドが urgent_value と一致したら緊急メッセージを追加
    urgent_field: Optional[str] = None
    urgent_value: Optional[str] = None

    def is_urgent(self, form_data: Dict[str, Any]) -> bool:
        if self.urgent_field is None:
            return False
        return form_data.get(self.urgent_field) == self.urgent_value


URGENT_CALLOUT = Callout(
    label="⚠️ URGENT:",
    text="This message indicates a crisis situation. Please respond immediately.",
    color="#dc2626",
)

FORM_TEMPLATES: Dict[str, FormTemplate] = {
    "church": FormTemplate(
        subject="🏛️ New Church Registration - The Open Church Project",
        heading="🏛️ New Church Wants to Join the Movement!",
        intro="A new church has registered to join The Open Church Project 24/7 network:",
        callout=Callout(
            label="Next Steps:",
            text="Contact this church to discuss implementation timeline and support needs.",
            color="#eab308",
        ),
    ),
    "contact": FormTemplate(
        subject="📬 New Contact Message - The Open Church Project",
        heading="📬 New Contact Message",
        intro="Someone has reached out through the website contact form:",
        urgent_field="subject",
        urgent_value=CRISIS_SUBJECT,
    ),
    "volunteer": FormTemplate(
        subject="🙋‍♀️ New Volunteer Application - The Open Church Project",
        heading="🙋‍♀️ New Volunteer Application",
        intro="Someone wants to volunteer with The Open Church Project:",
        callout=Callout(
            label="Next Steps:",
            text="Follow up with volunteer opportunities in their area.",
            color="#059669",
        ),
    ),
    "story": FormTemplate(
        subject="📖 New Story Submission - The Open Church Project",
        heading="📖 New Story Submission",
        intro="Someone has shared their story about The Open Church Project:",
        callout=Callout(
            label="Review Required:",
            text="Please review this story for potential publication on the website.",
            color="#7c3aed",
        ),
    ),
    "newsletter": FormTemplate(
        subject="📧 New Newsletter Subscription - The Open Church Project",
        heading="📧 New Newsletter Subscriber",
        intro="Someone has subscribed to The Open Church Project newsletter:",
        callout=Callout(
            label="Growing Network:",
            text="Add this email to your newsletter distribution list.",
            color="#0ea5e9",
        ),
    ),
    "donation": FormTemplate(
        subject="💝 New Donation - The Open Church Project",
        heading="💝 New Donation Received",
        intro="A donation has been submitted through The Open Church Project website:",
        callout=Callout(
            label="Action Required:",
            text="Process this donation and send receipt if email was provided.",
            color="#eab308",
        ),
    ),
}

GENERIC_TEMPLATE = FormTemplate(
    subject="📋 New Website Submission - The Open Church Project",
    heading="📋 New Website Submission",
    intro="A new form submission has been received:",
)


def select_template(form_type: Optional[str]) -> FormTemplate:
    return FORM_TEMPLATES.get(form_type or "", GENERIC_TEMPLATE)


def format_label(key: str) -> str:
    """first_name -> First Name"""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("_", " "))


def to_text(value: Any) -> str:
    """JSONの値をフォームに入力された表記のまま文字列にする（true/false、nullは空文字）"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        if not value:
            return NOT_PROVIDED
        return ", ".join(to_text(item) for item in value)
    # 0、False、空文字、null はいずれも未入力として扱う
    if not value:
        return NOT_PROVIDED
    return to_text(value)


def format_form_data(form_data: Dict[str, Any]) -> str:
    """フォームの各フィールドを1行ずつ<tr>に変換する（入力順を保持）"""
    rows = []
    for key, value in form_data.items():
        label = escape(format_label(key))
        cell = escape(format_value(value))
        rows.append(
            f'<tr><td style="{CELL_STYLE} font-weight: bold;">{label}:</td>'
            f'<td style="{CELL_STYLE}">{cell}</td></tr>'
        )
    return "".join(rows)


def render_submission(form_type: Optional[str], form_data: Optional[Dict[str, Any]], submission_time: Optional[str]) -> Tuple[str, str]:
    """
    フォーム種別に応じた件名とHTML本文を作成する

    Returns:
        Tuple[str, str]: (件名, HTML本文)
    """
    form_data = form_data or {}
    template = select_template(form_type)

    def body(header: str = "", main: str = "", footer: str = ""):
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; background: #f9f9f9; padding: 20px;">
          <div style="background: white; padding: 30px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1);">
          {header}
          {main}
          </div>
          {footer}
        </div>
        """

    def header():
        return f"""
              <h1 style="color: #1e3a8a; margin-bottom: 20px;">{template.heading}</h1>
              <p style="font-size: 16px; color: #666; margin-bottom: 20px;">{template.intro}</p>"""

    def main():
        callouts = ""
        if template.callout is not None:
            callouts += template.callout.to_html()
        if template.is_urgent(form_data):
            callouts += URGENT_CALLOUT.to_html()
        return f"""
              <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
                {format_form_data(form_data)}
              </table>{callouts}"""

    def footer():
        return f"""
          <div style="text-align: center; margin-top: 20px; color: #666; font-size: 12px;">
            <p>This notification was sent from The Open Church Project website</p>
            <p>Submission Time: {escape(submission_time or "")}</p>
          </div>"""

    return template.subject, body(header(), main(), footer())
