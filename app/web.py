"""Flask application for browsing duplicate groups and trashing images.

Routes:
    GET    /                                   redirect to the first group
    GET    /group/<g>                          render one group
    GET    /group/<g>/image/<i>                stream image bytes (ETag aware)
    DELETE /group/<g>/image/<i>                move the image into the trash
"""

from __future__ import annotations

from flask import Flask, Response, redirect, render_template, request, url_for
from jinja2 import TemplateError
from loguru import logger
from werkzeug.wsgi import wrap_file

from app.viewmodels.group_vm import GroupVM
from core.models import ReviewState
from core.services.interfaces import TransferStatus, TrashStatus
from infrastructure.delete_service import DeleteService
from infrastructure.image_service import ImageService
from infrastructure.settings import JsonSettings

PLACEHOLDER_IMAGE = "missing.svg"
DEFAULT_CHUNK_SIZE = 64 * 1024


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _render(template: str, **context) -> Response | str:
    try:
        return render_template(template, **context)
    except TemplateError as ex:
        logger.error("Render {} failed: {}", template, ex)
        return _text(f"Failed to render template. Error: {ex}", 500)


def create_app(state: ReviewState, settings: JsonSettings | None = None) -> Flask:
    """Build the review application around an already-parsed `ReviewState`."""
    settings = settings or JsonSettings.defaults()
    chunk_size = int(settings.get("transfer.chunk_size", DEFAULT_CHUNK_SIZE))
    images = ImageService(state)
    deleter = DeleteService(state, log_dir=settings.get("trash.log_dir"))

    app = Flask(__name__)

    @app.route("/")
    def index():
        return redirect(url_for("group", group_index=0), code=308)

    @app.route("/group/<int:group_index>")
    def group(group_index: int):
        store = state.store
        if store.is_empty():
            return _render("empty.html", base_dir=state.base_dir)
        dup_group = store.group(group_index)
        if dup_group is None:
            return redirect(url_for("group", group_index=0))
        vm = GroupVM.build(group_index, dup_group, store.group_count())
        return _render("group.html", group=vm)

    @app.route("/group/<int:group_index>/image/<int:image_index>", methods=["GET"])
    def get_image(group_index: int, image_index: int):
        transfer = images.fetch(group_index, image_index, request.headers.get("If-None-Match"))

        if transfer.status is TransferStatus.NOT_FOUND:
            return _text(transfer.message, 404)
        if transfer.status is TransferStatus.MISSING:
            return redirect(url_for("static", filename=PLACEHOLDER_IMAGE))
        if transfer.status is TransferStatus.ERROR:
            return _text(transfer.message, 500)
        if transfer.status is TransferStatus.NOT_MODIFIED:
            resp = Response(status=304)
            resp.headers["ETag"] = transfer.etag
            return resp

        body = wrap_file(request.environ, transfer.stream, buffer_size=chunk_size)
        resp = Response(body, mimetype=transfer.content_type, direct_passthrough=True)
        resp.headers["Content-Length"] = str(transfer.content_length)
        resp.headers["ETag"] = transfer.etag
        return resp

    @app.route("/group/<int:group_index>/image/<int:image_index>", methods=["DELETE"])
    def trash_image(group_index: int, image_index: int):
        result = deleter.trash(group_index, image_index)
        if result.status is TrashStatus.NOT_FOUND:
            return _text(result.message, 404)
        if result.status is TrashStatus.ERROR:
            return _text(result.message, 500)
        return _text("Deleted", 200)

    return app
