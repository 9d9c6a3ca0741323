"""Fine-tuning - uploads the training corpus and tracks the resulting model."""

import threading
from typing import Any, Optional

from ..config import AppConfig
from ..errors import UpstreamError, ValidationError
from ..feedback.feedback_store import FeedbackStore
from ..observability import logger
from .exporter import TrainingDataExporter
from .seed_examples import ACCESSIBILITY_INSTRUCTION


class FineTunedModelCell:
    """
    Process-wide holder for the current fine-tuned model id.

    Written by a status check once a job succeeds, read by generation.
    """

    def __init__(self, model_id: Optional[str] = None):
        self._lock = threading.Lock()
        self._model_id = model_id

    def get(self) -> Optional[str]:
        with self._lock:
            return self._model_id

    def set(self, model_id: str):
        with self._lock:
            self._model_id = model_id

    def clear(self):
        with self._lock:
            self._model_id = None


class FineTuningManager:
    """
    Drives fine-tuning against the OpenAI API.

    - create_fine_tuned_model: build corpus, upload it, start a job
    - check_fine_tuning_status: poll a job, remember the model when done
    - generate_with_fine_tuned_model: chat completion on the tuned model
    """

    N_EPOCHS = 3

    def __init__(
        self,
        config: AppConfig,
        store: FeedbackStore,
        exporter: TrainingDataExporter,
        model_cell: Optional[FineTunedModelCell] = None,
        client: Any = None,
    ):
        self.config = config
        self.store = store
        self.exporter = exporter
        self.model_cell = model_cell or FineTunedModelCell()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.config.has_openai:
                raise ValidationError("OpenAI API key required for fine-tuning")
            from openai import OpenAI
            self._client = OpenAI(api_key=self.config.openai_api_key)
        return self._client

    def create_fine_tuned_model(self) -> dict:
        """Upload the complete training corpus and create a fine-tuning job."""
        if not self.config.has_openai and self._client is None:
            raise ValidationError("OpenAI API key required for fine-tuning")

        corpus = self.exporter.export_complete_training_data(self.store.read_all())

        if corpus.total_examples < self.config.min_fine_tune_examples:
            raise ValidationError(
                f"Need at least {self.config.min_fine_tune_examples} training examples. "
                f"Current: {corpus.total_examples}"
            )

        try:
            training_file = self.client.files.create(
                file=(self.exporter.complete_path.name, corpus.payload.encode("utf-8")),
                purpose="fine-tune",
            )
            logger.info(f"Training file uploaded: {training_file.id}")

            job = self.client.fine_tuning.jobs.create(
                training_file=training_file.id,
                model=self.config.fine_tune_base_model,
                hyperparameters={"n_epochs": self.N_EPOCHS},
            )
        except Exception as e:
            logger.error(f"Error creating fine-tuned model: {e}")
            raise UpstreamError("Fine-tuning job could not be created") from e

        logger.info(f"Fine-tuning job created: {job.id}")
        return {
            "jobId": job.id,
            "status": job.status,
            "trainingExamples": corpus.total_examples,
        }

    def check_fine_tuning_status(self, job_id: str) -> dict:
        try:
            job = self.client.fine_tuning.jobs.retrieve(job_id)
        except Exception as e:
            logger.error(f"Error checking fine-tuning status for {job_id}: {e}")
            raise UpstreamError("Fine-tuning status unavailable") from e

        if job.status == "succeeded" and job.fine_tuned_model:
            self.model_cell.set(job.fine_tuned_model)
            logger.info(f"Fine-tuning completed! Model: {job.fine_tuned_model}")

        return {
            "status": job.status,
            "model": job.fine_tuned_model,
            "createdAt": job.created_at,
            "finishedAt": job.finished_at,
        }

    def generate_with_fine_tuned_model(self, image_description: str) -> str:
        model_id = self.model_cell.get()
        if not model_id:
            raise ValidationError("No fine-tuned model available")

        try:
            response = self.client.chat.completions.create(
                model=model_id,
                messages=[
                    {"role": "system", "content": ACCESSIBILITY_INSTRUCTION},
                    {"role": "user", "content": image_description},
                ],
                max_tokens=100,
                temperature=0.3,
            )
        except Exception as e:
            logger.error(f"Error with fine-tuned model {model_id}: {e}")
            raise UpstreamError("Fine-tuned model request failed") from e

        return (response.choices[0].message.content or "").strip()
