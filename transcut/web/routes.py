"""Web UI routes for transcut."""

import logging
import uuid
from pathlib import Path

from flask import (
    Blueprint,
    current_app,
    jsonify,
    render_template,
    request,
    send_file,
)

from transcut.editors.captions import write_srt
from transcut.editors.xmeml import write_xmeml
from transcut.engine import EmptySelectionError, compile_cuts
from transcut.manifest import CompileConfig
from transcut.preview import generate_preview
from transcut.readers.selection import parse_selection
from transcut.readers.subtitles import parse_srt
from transcut.readers.xmeml import parse_xmeml

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__, template_folder="templates")

# In-memory job store: job_id -> job dict
_jobs: dict[str, dict] = {}


def _job_or_404(job_id: str):
    job = _jobs.get(job_id)
    if job is None:
        return None, (jsonify({"error": "Job not found"}), 404)
    return job, None


@bp.route("/")
def index():
    return render_template("index.html")


@bp.route("/api/upload", methods=["POST"])
def upload():
    if "timeline" not in request.files:
        return jsonify({"error": "No timeline file provided"}), 400

    tl_file = request.files["timeline"]
    if not tl_file.filename:
        return jsonify({"error": "Empty filename"}), 400

    try:
        timeline = parse_xmeml(tl_file.read())
        segments = []
        sub_file = request.files.get("subtitles")
        if sub_file is not None and sub_file.filename:
            segments = parse_srt(sub_file.read().decode("utf-8-sig"))
        preview = generate_preview(timeline, segments)
    except (ValueError, UnicodeDecodeError) as e:
        return jsonify({"error": str(e)}), 400

    job_id = uuid.uuid4().hex[:12]
    job_dir = Path(current_app.config["WORK_DIR"]) / job_id
    job_dir.mkdir(parents=True, exist_ok=True)

    _jobs[job_id] = {
        "dir": job_dir,
        "filename": tl_file.filename,
        "timeline": timeline,
        "segments": segments,
        "preview": preview,
        "cuts": None,
        "status": "uploaded",
    }
    logger.info("Job %s: %d clips, %d segments", job_id, len(timeline.clips), len(segments))

    return jsonify({
        "job_id": job_id,
        "filename": tl_file.filename,
        "fps": timeline.fps,
        "width": timeline.width,
        "height": timeline.height,
        "preview": [r.to_dict() for r in preview],
    })


@bp.route("/api/jobs/<job_id>/preview")
def preview(job_id: str):
    job, err = _job_or_404(job_id)
    if err:
        return err
    return jsonify({"preview": [r.to_dict() for r in job["preview"]]})


@bp.route("/api/jobs/<job_id>/compile", methods=["POST"])
def compile_job(job_id: str):
    job, err = _job_or_404(job_id)
    if err:
        return err

    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, (list, dict)):
        return jsonify({"error": "Body must be a JSON list of ids or an object"}), 400

    # A bare list carries only ids; padding options come from an object body
    options = body if isinstance(body, dict) else {}
    defaults = CompileConfig()
    try:
        if isinstance(body, list) or "selected_ids" in body or "selectedClips" in body:
            selected_ids = parse_selection(body)
        else:
            selected_ids = []
        config = CompileConfig(
            head_padding=options.get("head_padding", defaults.head_padding),
            tail_padding=options.get("tail_padding", defaults.tail_padding),
            merge_tolerance=options.get("merge_tolerance", defaults.merge_tolerance),
        )
        cuts = compile_cuts(job["timeline"], job["segments"], selected_ids, config)
    except EmptySelectionError as e:
        return jsonify({"error": str(e)}), 422
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    job["cuts"] = cuts
    job["status"] = "compiled"
    return jsonify({
        "cuts": [c.to_dict() for c in cuts],
        "duration_frames": sum(c.duration_frames for c in cuts),
    })


@bp.route("/api/jobs/<job_id>/export/<fmt>")
def export(job_id: str, fmt: str):
    job, err = _job_or_404(job_id)
    if err:
        return err
    if fmt not in ("xml", "srt"):
        return jsonify({"error": f"Unknown export format: {fmt}"}), 400
    if job["cuts"] is None:
        return jsonify({"error": "Job not compiled"}), 409

    timeline = job["timeline"]
    stem = Path(job["filename"]).stem + "_cut"
    if fmt == "xml":
        path = write_xmeml(
            job["cuts"], timeline.fps, timeline.width, timeline.height,
            job["dir"] / f"{stem}.xml",
        )
        mimetype = "application/xml"
    else:
        path = write_srt(job["cuts"], timeline.fps, job["dir"] / f"{stem}.srt")
        mimetype = "application/x-subrip"
    return send_file(path, as_attachment=True, download_name=path.name, mimetype=mimetype)


@bp.route("/api/jobs/<job_id>/status")
def job_status(job_id: str):
    job, err = _job_or_404(job_id)
    if err:
        return err

    resp = {
        "status": job["status"],
        "filename": job.get("filename"),
        "segments": len(job["segments"]),
        "clips": len(job["timeline"].clips),
    }
    if job["cuts"] is not None:
        resp["cuts"] = len(job["cuts"])
    return jsonify(resp)
