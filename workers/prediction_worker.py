"""Background worker that sends one prediction request off the GUI thread."""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from core.prediction_client import MSG_CONNECTION, PredictionClient
from core.utils import PredictionResponse
from core.workflow import PendingSubmission

logger = logging.getLogger(__name__)


class PredictionWorker(QThread):
    """Runs PredictionClient.predict and hands the response back with its token."""

    finished = pyqtSignal(int, object)     # token, PredictionResponse

    def __init__(self, client: PredictionClient, pending: PendingSubmission, parent=None):
        super().__init__(parent)
        self._client = client
        self._pending = pending

    @property
    def token(self) -> int:
        return self._pending.token

    def run(self):
        try:
            response = self._client.predict(self._pending.request)
        except Exception as e:
            # predict() folds transport errors itself; this only catches bugs.
            logger.exception("Prediction worker crashed")
            response = PredictionResponse.failure(f"{MSG_CONNECTION} ({e})")
        self.finished.emit(self._pending.token, response)
