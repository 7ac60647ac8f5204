"""NiceGUI chat interface with multiple sessions and PDF upload."""

import logging
from datetime import datetime
from functools import partial

from nicegui import app, events, ui

from pdfchat.clients import create_clients
from pdfchat.config import get_app_config
from pdfchat.models.schemas import Message, Sender, Session
from pdfchat.storage.kv_store import create_kv_store
from pdfchat.storage.session_store import SessionStore
from pdfchat.ui.controller import ChatController, ViewState
from pdfchat.ui.markdown import escape_text, markdown_to_html

logger = logging.getLogger(__name__)


def format_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%I:%M %p")
    except ValueError:
        return ""


def format_date(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%b %d, %Y")
    except ValueError:
        return ""


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .sidebar { border-right: 1px solid rgba(128, 128, 128, 0.2); }
    .session-item { border-radius: 8px; cursor: pointer; }
    .session-item:hover { background: rgba(102, 126, 234, 0.08); }
    .session-active { background: rgba(102, 126, 234, 0.16); }

    .message-user {
        background: #3182ce;
        color: white;
        border-radius: 18px 18px 0 18px;
    }
    .message-ai {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 0;
    }
    .body--dark .message-ai { background: #2d3748; color: #f7fafc; }
    .message-system {
        background: rgba(128, 128, 128, 0.12);
        border-radius: 999px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #3182ce;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-ai strong { font-weight: 600; }
    .message-ai pre { margin: 0.5rem 0; }
    .message-ai code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""

DARK_MODE_KEY = "darkMode"

STATUS_TEXT = {
    ViewState.UPLOADING: "Processing PDF...",
    ViewState.WAITING_FOR_ANSWER: "Thinking...",
}


def render_message(msg: Message) -> None:
    if msg.sender is Sender.SYSTEM:
        with ui.row().classes("w-full justify-center"):
            ui.label(msg.content).classes("message-system px-3 py-1 text-xs text-gray-500")
        return

    is_user = msg.sender is Sender.USER
    align = "items-end" if is_user else "items-start"
    bubble = "message-user" if is_user else "message-ai"

    with ui.column().classes(f"w-full gap-1 {align}"):
        ui.label("You" if is_user else "AI").classes("text-xs text-gray-500")
        with ui.element("div").classes(f"px-4 py-2 max-w-[80%] shadow {bubble}"):
            # Markdown for answers, plain text for user input
            if is_user:
                content = escape_text(msg.content)
            else:
                content = markdown_to_html(msg.content)
            ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
        ui.label(format_time(msg.timestamp)).classes("text-[10px] text-gray-400")


def render_status_indicator(status_text: str) -> None:
    with ui.row().classes("w-full justify-start"):
        with ui.element("div").classes("message-ai px-4 py-3"):
            with ui.row().classes("items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label(status_text).classes("text-sm text-gray-500 italic")


def _notify(title: str, description: str | None, level: str) -> None:
    ui.notify(title, caption=description, type=level, position="top", timeout=5000)


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Sessions live in NiceGUI user storage, or the configured file."""
    ui.add_head_html(CUSTOM_CSS)
    dark = ui.dark_mode(app.storage.user.get(DARK_MODE_KEY, False))

    config = get_app_config()
    ingestion, conversation = create_clients(config)
    store = SessionStore(create_kv_store(config.storage_file, app.storage.user))
    store.load()
    controller = ChatController(store, ingestion, conversation, notify=_notify)

    input_field: ui.textarea

    @ui.refreshable
    def session_list() -> None:
        sessions = store.sessions
        if not sessions:
            ui.label("No chats yet").classes("text-sm text-gray-400 px-2")
            return
        for session in sessions:
            render_session_item(session)

    def render_session_item(session: Session) -> None:
        active = "session-active" if session.id == store.active_id else ""
        with (
            ui.row()
            .classes(f"w-full items-center no-wrap px-2 py-1 session-item {active}")
            .on("click", partial(controller.select_session, session.id))
        ):
            ui.icon("picture_as_pdf" if session.has_document else "chat_bubble_outline").classes(
                "text-gray-500"
            )
            with ui.column().classes("gap-0 flex-grow min-w-0"):
                ui.label(session.title).classes("text-sm truncate w-full")
                ui.label(format_date(session.created_at)).classes("text-[10px] text-gray-400")
            # click.stop keeps the row from re-selecting the deleted session
            ui.button(icon="delete").props("flat round dense size=sm color=grey").on(
                "click.stop", partial(controller.delete_session, session.id)
            )

    @ui.refreshable
    def transcript() -> None:
        state = controller.state
        if state is ViewState.NO_ACTIVE_SESSION:
            with ui.column().classes("w-full h-96 items-center justify-center gap-4 text-center"):
                ui.label("Welcome to PDF Chat!").classes("text-2xl font-bold")
                ui.label("Your personal PDF assistant is ready.").classes("text-lg")
                ui.label(
                    "Upload your PDFs, ask questions, and discover insights in seconds. "
                    'Hit "New Chat" to get started!'
                ).classes("text-gray-500 max-w-md")
                ui.button("New Chat", on_click=controller.new_session).props("color=primary")
            return

        session = controller.active_session
        if session is not None and not session.messages:
            with ui.column().classes("w-full h-64 items-center justify-center gap-2"):
                ui.label("Start a conversation").classes("text-xl font-medium text-gray-500")
                ui.label("Upload a PDF or type a message to begin").classes("text-gray-400")
        elif session is not None:
            for msg in session.messages:
                render_message(msg)

        if state in STATUS_TEXT:
            render_status_indicator(STATUS_TEXT[state])

    def update_controls() -> None:
        enabled = controller.state is not ViewState.NO_ACTIVE_SESSION
        upload_btn.set_enabled(enabled)
        send_btn.set_enabled(enabled)
        input_field.set_enabled(enabled)
        if controller.is_busy:
            send_btn.props("loading")
        else:
            send_btn.props(remove="loading")

    def refresh() -> None:
        session_list.refresh()
        transcript.refresh()
        update_controls()

    controller.on_change(refresh)

    def toggle_dark_mode() -> None:
        dark.toggle()
        app.storage.user[DARK_MODE_KEY] = dark.value

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip():
            return
        input_field.value = ""
        await controller.send_message(text)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        uploader.reset()
        content = await e.file.read()
        logger.info(f"Received upload {e.file.name} ({len(content)} bytes)")
        await controller.upload_file(e.file.name, content)

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("sidebar w-72 h-full p-3 gap-2"):
            ui.button("New Chat", icon="add", on_click=controller.new_session).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                session_list()

        # Main chat area
        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.row().classes("w-full px-5 py-3 items-center justify-between shadow-sm"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("attach_file").classes("text-xl")
                    ui.label("PDF Assistant").classes("text-md font-semibold")
                ui.button(icon="dark_mode", on_click=toggle_dark_mode).props("flat round").tooltip(
                    "Toggle light/dark mode"
                )

            with ui.scroll_area().classes("flex-grow w-full"):
                with ui.column().classes("w-full p-5 gap-3"):
                    transcript()

            with ui.row().classes("w-full p-4 gap-2 items-end border-t"):
                uploader = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props("accept=.pdf")
                    .classes("hidden")
                )
                upload_btn = (
                    ui.button(icon="attach_file", on_click=lambda: uploader.run_method("pickFiles"))
                    .props("flat round")
                    .tooltip("Upload PDF")
                )
                input_field = (
                    ui.textarea(placeholder="Type your message...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button("Send", icon="send", on_click=send_message).props("rounded")
    update_controls()


def main() -> None:
    """Run the chat UI on its own, without the FastAPI app."""
    config = get_app_config()
    ui.run(
        title="PDF Chat",
        port=8080,
        reload=False,
        storage_secret=config.storage_secret,
    )


if __name__ == "__main__":
    main()
