"""NiceGUI case sidebar and chat view with streamed answers and voice input."""

import logging

from nicegui import events, ui

from multirag.analysis.client import get_analysis_client
from multirag.ingestion.files import IngestionError, ingest_batch
from multirag.ingestion.previews import get_preview_registry
from multirag.models.schemas import AnalysisOptions, Case, CaseFile, FileCategory, Role
from multirag.session.controller import SessionControllers
from multirag.session.voice import VOICE_MIME_TYPE, VoiceCapture, VoiceCaptureError, VoiceState
from multirag.store.case_store import CaseStore

logger = logging.getLogger(__name__)

FILE_ICONS = {
    FileCategory.IMAGE: "image",
    FileCategory.AUDIO: "audiotrack",
    FileCategory.PDF: "picture_as_pdf",
    FileCategory.VIDEO: "movie",
    FileCategory.OTHER: "description",
}

# Records until window.multiragRecorder.stop(), then hands the whole buffer back
START_RECORDING_JS = """
navigator.mediaDevices.getUserMedia({ audio: true }).then((stream) => {
  const recorder = new MediaRecorder(stream, { mimeType: 'audio/webm' });
  const chunks = [];
  recorder.ondataavailable = (event) => chunks.push(event.data);
  recorder.onstop = () => {
    stream.getTracks().forEach((track) => track.stop());
    const reader = new FileReader();
    reader.onload = () => emitEvent('voice_recorded', {
      audio: reader.result.split(',')[1] || '',
      mime: 'audio/webm',
    });
    reader.onerror = () => emitEvent('voice_error', String(reader.error));
    reader.readAsDataURL(new Blob(chunks, { type: 'audio/webm' }));
  };
  window.multiragRecorder = recorder;
  recorder.start();
}).catch((err) => emitEvent('voice_error', String(err)));
"""

STOP_RECORDING_JS = "window.multiragRecorder && window.multiragRecorder.stop();"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f1f5f9; }

    .sidebar { background: white; border-right: 1px solid #e2e8f0; }
    .case-item { border-radius: 8px; cursor: pointer; }
    .case-item:hover { background: #f1f5f9; }
    .case-item-active { background: #dbeafe; color: #1d4ed8; }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-model {
        background: white;
        color: #1e293b;
        border-radius: 18px 18px 18px 4px;
        box-shadow: 0 1px 2px rgba(0, 0, 0, 0.06);
    }

    .document-card {
        background: #f8fafc;
        border: 1px solid #e2e8f0;
        border-radius: 8px;
    }
</style>
"""


def _format_size(size_bytes: int) -> str:
    return f"{size_bytes / 1024:.1f} KB"


@ui.page("/")
def cases_page() -> None:
    """Main page: case list on the left, active case chat on the right."""
    ui.add_head_html(CUSTOM_CSS)

    previews = get_preview_registry()
    client = get_analysis_client()
    store = CaseStore(previews)
    controllers = SessionControllers(store, client)
    voice = VoiceCapture(client)

    # Previews outlive the page otherwise; the registry is process-wide
    ui.context.client.on_delete(store.clear)

    welcome_panel: ui.column
    chat_panel: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button
    mic_btn: ui.button
    thinking_switch: ui.switch

    def is_awaiting() -> bool:
        case = store.active_case
        return case is not None and controllers.get(case.id).is_awaiting

    def update_controls() -> None:
        has_case = store.active_case is not None
        welcome_panel.set_visibility(not has_case)
        chat_panel.set_visibility(has_case)

        busy = is_awaiting()
        recording = voice.state is VoiceState.RECORDING
        transcribing = voice.state is VoiceState.TRANSCRIBING

        input_field.set_enabled(not (busy or voice.is_busy))
        send_btn.set_enabled(not (busy or voice.is_busy))
        mic_btn.set_enabled(not (busy or transcribing))
        mic_btn.props(f"color={'red' if recording else 'grey-8'}")
        mic_btn.props(f"icon={'hourglass_top' if transcribing else 'mic'}")

    def on_store_change() -> None:
        case_list.refresh()
        case_header.refresh()
        documents.refresh()
        messages.refresh()
        update_controls()
        scroll_area.scroll_to(percent=1.0)

    store.subscribe(on_store_change)

    # === Case actions ===

    def new_case() -> None:
        store.create()

    def select_case(case_id: str) -> None:
        if case_id != store.active_id:
            input_field.value = ""
        store.select(case_id)

    def delete_case(case_id: str) -> None:
        store.delete(case_id)
        controllers.discard(case_id)

    async def handle_upload(e: events.MultiUploadEventArguments) -> None:
        case_id = store.active_id
        try:
            files = await ingest_batch(e.files, previews)
        except IngestionError as err:
            logger.warning(f"Upload dropped for {case_id}: {err}")
            ui.notify("Some files could not be read. Nothing was added.", type="warning")
            return
        finally:
            e.sender.reset()
        store.add_files(case_id, files)

    def remove_file(name: str) -> None:
        store.remove_file(store.active_id, name)

    async def send_message() -> None:
        case = store.active_case
        text = input_field.value or ""
        if case is None or not text.strip() or voice.is_busy:
            return
        controller = controllers.get(case.id)
        if controller.is_awaiting:
            return

        input_field.value = ""
        send_btn.disable()
        options = AnalysisOptions(extended_reasoning=thinking_switch.value)
        await controller.submit(text, options)
        update_controls()
        messages.refresh()

    # === Voice input ===

    def toggle_recording() -> None:
        if voice.state is VoiceState.RECORDING:
            ui.run_javascript(STOP_RECORDING_JS)
            return
        try:
            voice.start()
        except VoiceCaptureError as err:
            ui.notify(str(err), type="warning")
            return
        ui.run_javascript(START_RECORDING_JS)
        update_controls()

    async def on_voice_recorded(e: events.GenericEventArguments) -> None:
        prompt = input_field.value or ""
        audio = e.args.get("audio", "")
        mime_type = e.args.get("mime") or VOICE_MIME_TYPE
        mic_btn.disable()
        try:
            input_field.value = await voice.finish(audio, prompt, mime_type)
        except VoiceCaptureError as err:
            ui.notify(str(err), type="negative")
        finally:
            update_controls()

    def on_voice_error(e: events.GenericEventArguments) -> None:
        voice.fail(str(e.args))
        ui.notify("Microphone unavailable", type="negative")
        update_controls()

    ui.on("voice_recorded", on_voice_recorded)
    ui.on("voice_error", on_voice_error)

    # === Rendering ===

    def model_label(extended: bool) -> str:
        return client.config.thinking_model if extended else client.config.fast_model

    @ui.refreshable
    def case_list() -> None:
        for case in store.cases:
            active = case.id == store.active_id
            item_classes = "case-item w-full p-3 items-center justify-between no-wrap"
            if active:
                item_classes += " case-item-active"
            with ui.row().classes(item_classes).on(
                "click", lambda _, cid=case.id: select_case(cid)
            ):
                with ui.column().classes("gap-0"):
                    ui.label(case.name).classes("font-semibold")
                    ui.label(case.created_at.astimezone().strftime("%b %d, %Y")).classes(
                        "text-xs text-slate-400"
                    )
                ui.button(icon="delete").props("flat round dense size=sm color=grey").on(
                    "click.stop", lambda _, cid=case.id: delete_case(cid)
                )

    @ui.refreshable
    def case_header() -> None:
        case = store.active_case
        if case is not None:
            ui.label(case.name).classes("text-xl font-bold text-slate-700")

    def render_file(f: CaseFile) -> None:
        with ui.row().classes("document-card p-3 items-center gap-3 no-wrap w-64"):
            if f.category is FileCategory.IMAGE and f.preview_ref:
                ui.image(f.preview_ref).classes("w-10 h-10 rounded")
            else:
                ui.icon(FILE_ICONS[f.category]).classes("text-2xl text-blue-500")
            with ui.column().classes("gap-0 flex-grow min-w-0"):
                ui.label(f.name).classes("text-sm font-medium truncate w-full")
                ui.label(_format_size(f.size_bytes)).classes("text-xs text-slate-500")
            ui.button(icon="close", on_click=lambda _, n=f.name: remove_file(n)).props(
                "flat round dense size=sm color=grey"
            )

    @ui.refreshable
    def documents() -> None:
        case = store.active_case
        if case is None:
            return
        with ui.row().classes("gap-3"):
            for f in case.files:
                render_file(f)

    def render_message(case: Case, index: int) -> None:
        msg = case.messages[index]
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-model"
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[75%] px-4 py-3 {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(msg.content).classes("text-sm")

    @ui.refreshable
    def messages() -> None:
        case = store.active_case
        if case is None:
            return
        for index in range(len(case.messages)):
            render_message(case, index)
        last = case.messages[-1] if case.messages else None
        if controllers.get(case.id).is_awaiting and last is not None and last.role is Role.MODEL:
            with ui.row().classes("items-center gap-2 text-slate-500"):
                ui.spinner(size="sm")
                ui.label("Analyzing...").classes("text-sm")

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("sidebar w-80 h-full p-4 gap-4"):
            ui.label("Multi-RAG Cases").classes("text-xl font-bold text-blue-600")
            ui.button("New Case", icon="add", on_click=new_case).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                case_list()

        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.column().classes("w-full h-full items-center justify-center") as welcome_panel:
                ui.label("Welcome to Multi-RAG Analysis").classes(
                    "text-2xl font-semibold text-slate-600"
                )
                ui.label("Create a new case from the sidebar to begin your analysis.").classes(
                    "text-slate-500"
                )

            with ui.column().classes("w-full h-full gap-0") as chat_panel:
                with ui.row().classes("w-full p-4 bg-white border-b"):
                    case_header()

                with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
                    with ui.column().classes("w-full p-6 gap-4"):
                        with ui.column().classes("w-full bg-white p-4 rounded-lg border gap-2"):
                            ui.label("Case Documents").classes("font-semibold text-slate-600")
                            documents()
                            ui.upload(
                                label="Add documents",
                                multiple=True,
                                auto_upload=True,
                                on_multi_upload=handle_upload,
                            ).props("flat bordered").classes("w-full")
                        messages()

                with ui.column().classes("w-full p-4 bg-white border-t gap-2"):
                    with ui.row().classes("w-full justify-end items-center"):
                        thinking_switch = ui.switch("Thinking Mode", value=False)
                        ui.label().bind_text_from(
                            thinking_switch, "value", model_label
                        ).classes("text-xs text-slate-400")
                    with ui.row().classes("w-full items-center gap-2 no-wrap"):
                        input_field = (
                            ui.input(placeholder="Ask about the documents, or use the mic...")
                            .props("outlined rounded dense")
                            .classes("flex-grow")
                            .on("keydown.enter", send_message)
                        )
                        mic_btn = ui.button(icon="mic", on_click=toggle_recording).props(
                            "round unelevated color=grey-8"
                        )
                        send_btn = ui.button(icon="send", on_click=send_message).props(
                            "round unelevated color=primary"
                        )

    update_controls()
