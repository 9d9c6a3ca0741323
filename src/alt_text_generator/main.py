"""Command line entry point for the Alt Text Generator."""

import argparse
import json
import sys

from .config import get_config, AppConfig
from .errors import AltTextError
from .feedback import FeedbackStore
from .observability import logger
from .server import build_exporter, create_app
from .training import FineTuningManager


def run_server(config: AppConfig, port: int = None, debug: bool = False):
    app = create_app(config)

    logger.info(f"Server running on port {port or config.port}")
    logger.info(
        f"OpenAI integration: "
        f"{'Enabled' if config.has_openai else 'Disabled (using mock responses)'}"
    )
    app.run(host="0.0.0.0", port=port or config.port, debug=debug)


def run_export(config: AppConfig) -> int:
    store = FeedbackStore(config.feedback_file)
    result = build_exporter(config).export_training_data(store.read_all())
    print(f"Generated {result.count} training examples -> {config.training_export_file}")
    return result.count


def run_complete_export(config: AppConfig) -> dict:
    store = FeedbackStore(config.feedback_file)
    result = build_exporter(config).export_complete_training_data(store.read_all())
    print(
        f"Generated {result.total_examples} training examples "
        f"({result.base_examples} seed, {result.feedback_examples} from feedback)"
    )
    return result.to_dict()


def _fine_tuning_manager(config: AppConfig) -> FineTuningManager:
    store = FeedbackStore(config.feedback_file)
    return FineTuningManager(config, store, build_exporter(config))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Alt text generation with a feedback loop")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--port", type=int, default=None, help="Port to listen on")
    serve.add_argument("--debug", action="store_true", help="Enable debug mode")

    subparsers.add_parser("export", help="Export feedback as JSONL training data")
    subparsers.add_parser("export-complete", help="Export seed + feedback training corpus")
    subparsers.add_parser("fine-tune", help="Upload the corpus and start a fine-tuning job")

    status = subparsers.add_parser("fine-tune-status", help="Check a fine-tuning job")
    status.add_argument("job_id", help="Fine-tuning job ID")

    args = parser.parse_args(argv)
    config = get_config()

    try:
        if args.command == "serve":
            run_server(config, port=args.port, debug=args.debug)
        elif args.command == "export":
            run_export(config)
        elif args.command == "export-complete":
            run_complete_export(config)
        elif args.command == "fine-tune":
            print(json.dumps(_fine_tuning_manager(config).create_fine_tuned_model(), indent=2))
        elif args.command == "fine-tune-status":
            result = _fine_tuning_manager(config).check_fine_tuning_status(args.job_id)
            print(json.dumps(result, indent=2))
    except AltTextError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
