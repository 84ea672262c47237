import html
import json

COPIED_SECONDS = 1.5
COPY_LABEL = "📋 Copy prompt"
COPIED_LABEL = "✅ Copied"


def _script_literal(value: str) -> str:
    # JSON string that cannot close the surrounding <script> tag
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def copy_button_html(text: str, copied_seconds: float = COPIED_SECONDS) -> str:
    """
    Copy button that runs in the browser.
    The copied label appears only after navigator.clipboard.writeText resolves
    and reverts after copied_seconds; a rejected write leaves the button as is.
    """
    return f"""
<button id="copy-prompt" style="border-radius: 999px; padding: 0.35rem 1rem; cursor: pointer;">{html.escape(COPY_LABEL)}</button>
<script>
const button = document.getElementById("copy-prompt");
const text = {_script_literal(text)};
button.addEventListener("click", () => {{
  navigator.clipboard.writeText(text).then(() => {{
    button.textContent = {_script_literal(COPIED_LABEL)};
    setTimeout(() => {{ button.textContent = {_script_literal(COPY_LABEL)}; }}, {int(copied_seconds * 1000)});
  }}).catch(() => {{}});
}});
</script>
"""
