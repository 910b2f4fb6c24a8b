"""
Document upload route.

Handles file upload, validation, and page counting.
Starts a new order in the session and redirects to print options.
"""

from datetime import datetime, timezone
from pathlib import Path

import bleach
from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from werkzeug.utils import secure_filename

from logging_config import get_logger
from models.order import Order
from models.print_job import DocumentMeta


# Module logger
logger = get_logger(__name__)

upload_bp = Blueprint("upload", __name__)

# Constants
MAX_FILENAME_LENGTH = 255
MAX_JOB_NAME_LENGTH = 200


def _allowed_file(filename: str, allowed_types) -> bool:
    """Check the file extension against the catalog's supported types."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed_types


def sanitize_text(text: str, max_length: int = None) -> str:
    """
    Strip markup and surrounding whitespace from user input.

    Args:
        text: Raw input text
        max_length: Optional maximum length to enforce

    Returns:
        Plain text safe for storage and display
    """
    if not text:
        return ""

    text = bleach.clean(text.strip(), tags=[], strip=True)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


@upload_bp.route("/upload", methods=["GET", "POST"])
def upload():
    """
    Handle document upload.

    GET: Display upload form
    POST: Store the file, count its pages, and redirect to options
    """
    if request.method == "POST":
        catalog = current_app.config["CATALOG_SERVICE"].get_catalog()

        try:
            job_name = sanitize_text(
                request.form.get("job_name", ""),
                max_length=MAX_JOB_NAME_LENGTH
            )
            upload_file = request.files.get("document")

            if not job_name:
                flash("Please provide a job name.", "error")
                return redirect(url_for("upload.upload"))

            if not upload_file or upload_file.filename == "":
                flash("Please choose a file to upload.", "error")
                return redirect(url_for("upload.upload"))

            if not _allowed_file(upload_file.filename, catalog.supported_file_types):
                supported = ", ".join(t.upper() for t in catalog.supported_file_types)
                flash(f"Unsupported file type. Supported types: {supported}.", "error")
                return redirect(url_for("upload.upload"))

            if len(upload_file.filename) > MAX_FILENAME_LENGTH:
                flash(f"Filename too long. Maximum {MAX_FILENAME_LENGTH} characters.", "error")
                return redirect(url_for("upload.upload"))

            upload_folder = Path(current_app.config["UPLOAD_FOLDER"])
            upload_folder.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
            safe_name = secure_filename(upload_file.filename)
            stored_name = f"{timestamp}_{safe_name}"
            stored_path = upload_folder / stored_name

            logger.info(f"Saving uploaded file: {stored_name}")
            upload_file.save(stored_path)

            analyzer = current_app.config.get("PDF_ANALYZER")
            if analyzer:
                document = analyzer.analyze(stored_path)
            else:
                logger.warning("PDF analyzer not configured, page count unknown")
                document = DocumentMeta(file_name=stored_name)

            order = Order(
                job_name=job_name,
                original_filename=safe_name,
                stored_filename=stored_name,
                stored_path=str(stored_path),
                uploaded_at=timestamp,
                document=document,
            )
            session["order"] = order.to_dict()
            session.modified = True

            if document.has_page_count:
                logger.info(f"Document analyzed: {document.page_count} pages")
                flash("Document uploaded successfully.", "success")
            else:
                flash("Document uploaded, but its pages could not be counted. Pricing will be pending.", "warning")

            return redirect(url_for("options.options"))

        except OSError as e:
            logger.error(f"Upload failed: {e}", exc_info=True)
            flash(f"Failed to upload file: {str(e)}", "error")
            return redirect(url_for("upload.upload"))

    return render_template("upload.html", order=session.get("order"))
