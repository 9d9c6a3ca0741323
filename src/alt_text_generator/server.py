"""
HTTP server for alt text generation, feedback capture and training export.

Routes:
    POST /api/generate-alt-text                       multipart upload, field "image"
    POST /api/feedback                                store a rating and optional improvement
    GET  /api/admin/analytics                         feedback summary
    POST /api/admin/generate-training-data            feedback-only JSONL export
    POST /api/admin/generate-complete-training-data   seed + feedback corpus
    POST /api/admin/fine-tune                         start a fine-tuning job
    GET  /api/admin/fine-tune/<job_id>                poll a fine-tuning job
    POST /api/admin/generate-with-fine-tuned-model    describe text with the tuned model
    GET  /api/health                                  liveness and OpenAI availability
"""

import math
import re
from typing import Optional

from flask import Flask, request, jsonify
from werkzeug.exceptions import InternalServerError, NotFound, RequestEntityTooLarge

from .config import AppConfig, get_config
from .errors import StorageIOError, UpstreamError, ValidationError
from .feedback import FeedbackAnalytics, FeedbackStore
from .feedback.feedback_store import format_timestamp, utc_now
from .generation import AltTextGenerator, validate_image_upload
from .models.feedback import FeedbackInput
from .observability import logger
from .training import FineTunedModelCell, FineTuningManager, TrainingDataExporter, load_seed_examples

_LEADING_INT = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))")


def parse_rating(value) -> int:
    """Leading integer of the submitted rating, as parseInt reads it."""
    if value is None or isinstance(value, bool):
        raise ValidationError("Rating is required")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Rating must be a number")
        return int(value)

    match = _LEADING_INT.match(str(value))
    if not match or match.group(2) == "":
        raise ValidationError("Rating must be a number")

    sign, hex_digits, decimal_digits = match.groups()
    number = int(hex_digits, 16) if hex_digits is not None else int(decimal_digits)
    return -number if sign == "-" else number


def parse_feedback(data: dict) -> FeedbackInput:
    """Build a FeedbackInput from a JSON request body."""
    if not isinstance(data, dict):
        raise ValidationError("Invalid feedback payload")

    return FeedbackInput(
        rating=parse_rating(data.get("rating")),
        generated_alt_text=data.get("generatedAltText") or "",
        user_improvement=data.get("userImprovement") or None,
        image_type=data.get("imageType") or None,
        helpful=bool(data.get("helpful")),
    )


def build_exporter(config: AppConfig) -> TrainingDataExporter:
    return TrainingDataExporter(
        export_path=config.training_export_file,
        complete_path=config.complete_training_file,
        seed_examples=load_seed_examples(config.seed_examples_file),
        write_complete=not config.is_production,
    )


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[FeedbackStore] = None,
    generator: Optional[AltTextGenerator] = None,
    exporter: Optional[TrainingDataExporter] = None,
    fine_tuning: Optional[FineTuningManager] = None,
) -> Flask:
    """Build the Flask app. Collaborators default to ones built from config."""
    config = config or get_config()
    store = store or FeedbackStore(config.feedback_file)
    generator = generator or AltTextGenerator.from_config(config)
    exporter = exporter or build_exporter(config)
    fine_tuning = fine_tuning or FineTuningManager(
        config, store, exporter, model_cell=FineTunedModelCell()
    )
    analytics = FeedbackAnalytics(store)

    app = Flask(__name__)
    # Oversized images are rejected by validate_image_upload; this only caps the request body
    app.config["MAX_CONTENT_LENGTH"] = config.max_image_bytes * 2

    @app.route("/api/generate-alt-text", methods=["POST"])
    def generate_alt_text():
        """Describe an uploaded image."""
        image = request.files.get("image")

        try:
            upload = validate_image_upload(
                filename=image.filename if image else None,
                mimetype=image.mimetype if image else None,
                data=image.read() if image else None,
                max_bytes=config.max_image_bytes,
            )
        except ValidationError as e:
            logger.warning(f"Rejected upload: {e}")
            return jsonify({"error": str(e)}), 400

        try:
            alt_text = generator.generate(upload)
        except (UpstreamError, StorageIOError) as e:
            logger.error(f"Error generating alt text: {e}")
            return jsonify({"error": "Failed to generate alt text. Please try again."}), 500

        return jsonify({"altText": alt_text})

    @app.route("/api/feedback", methods=["POST"])
    def submit_feedback():
        """Store a rating and optional improved text."""
        data = request.get_json(silent=True) or {}

        try:
            record = store.append(parse_feedback(data))
        except ValidationError as e:
            logger.warning(f"Rejected feedback: {e}")
            return jsonify({"error": str(e)}), 400
        except StorageIOError as e:
            logger.error(f"Error saving feedback: {e}")
            return jsonify({"error": "Failed to save feedback"}), 500

        logger.info(f"Stored feedback {record.id} (rating={record.rating})")
        return jsonify({"success": True, "message": "Feedback saved successfully"})

    @app.route("/api/admin/analytics", methods=["GET"])
    def get_analytics():
        """Summary over all stored feedback. Unreadable storage reads as empty."""
        try:
            summary = analytics.get_analytics()
        except Exception as e:
            logger.error(f"Error computing analytics: {e}")
            return jsonify({"error": "Failed to get analytics"}), 500

        analytics.log_summary(summary)
        return jsonify(summary.to_dict())

    @app.route("/api/admin/generate-training-data", methods=["POST"])
    def generate_training_data():
        try:
            result = exporter.export_training_data(store.read_all())
        except StorageIOError as e:
            logger.error(f"Error generating training data: {e}")
            return jsonify({"error": "Failed to generate training data"}), 500

        return jsonify({
            "success": True,
            "message": f"Generated {result.count} training examples",
            "count": result.count,
        })

    @app.route("/api/admin/generate-complete-training-data", methods=["POST"])
    def generate_complete_training_data():
        try:
            result = exporter.export_complete_training_data(store.read_all())
        except StorageIOError as e:
            logger.error(f"Error generating complete training data: {e}")
            return jsonify({"error": "Failed to generate training data"}), 500

        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/admin/fine-tune", methods=["POST"])
    def create_fine_tune():
        try:
            job = fine_tuning.create_fine_tuned_model()
        except ValidationError as e:
            logger.warning(f"Fine-tuning rejected: {e}")
            return jsonify({"error": str(e)}), 400
        except (UpstreamError, StorageIOError) as e:
            logger.error(f"Error creating fine-tuned model: {e}")
            return jsonify({"error": "Failed to create fine-tuning job"}), 500

        return jsonify(job)

    @app.route("/api/admin/fine-tune/<job_id>", methods=["GET"])
    def fine_tune_status(job_id: str):
        try:
            status = fine_tuning.check_fine_tuning_status(job_id)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except UpstreamError as e:
            logger.error(f"Error checking fine-tuning status: {e}")
            return jsonify({"error": "Failed to check fine-tuning status"}), 500

        return jsonify(status)

    @app.route("/api/admin/generate-with-fine-tuned-model", methods=["POST"])
    def generate_with_fine_tuned_model():
        data = request.get_json(silent=True)
        description = data.get("imageDescription") if isinstance(data, dict) else None
        description = description.strip() if isinstance(description, str) else ""

        try:
            if not description:
                raise ValidationError("imageDescription is required")
            alt_text = fine_tuning.generate_with_fine_tuned_model(description)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except UpstreamError as e:
            logger.error(f"Error with fine-tuned model: {e}")
            return jsonify({"error": "Failed to generate alt text. Please try again."}), 500

        return jsonify({"altText": alt_text})

    @app.route("/api/health", methods=["GET"])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "timestamp": format_timestamp(utc_now()),
            "hasOpenAI": config.has_openai,
        })

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        max_mb = config.max_image_bytes // (1024 * 1024)
        return jsonify({"error": f"File too large. Maximum size is {max_mb}MB."}), 400

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(InternalServerError)
    def handle_internal_error(error):
        cause = getattr(error, "original_exception", None) or error
        logger.error(f"Unhandled error on {request.method} {request.path}: {cause!r}")
        return jsonify({"error": "Internal server error"}), 500

    return app
