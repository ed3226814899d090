"""Analysis workflow: the state machine between image intake and a finished result.

States::

    Idle --select--> Validating --valid--> Ready --submit--> Submitting
    Submitting --success--> Succeeded     Submitting --failure--> Failed
    Succeeded/Failed --reset--> Idle      Ready/Failed/Succeeded --select--> Validating

A rejected selection restores whatever state preceded it. Only one request
is ever in flight: ``submit`` while Submitting does nothing, and a response
is applied only if it carries the token of the current submission.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from core.errors import NoImageSelected, ValidationError
from core.image_intake import ImageIntake
from core.prediction_client import MSG_CONNECTION, PredictionClient
from core.utils import (
    PatientInfo,
    PredictionRequest,
    PredictionResponse,
    PredictionResult,
    StateCallback,
    UploadedImage,
    now_iso,
)

logger = logging.getLogger(__name__)


# --- States ---

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Validating:
    file_name: str


@dataclass(frozen=True)
class Ready:
    image: UploadedImage


@dataclass(frozen=True)
class Submitting:
    image: UploadedImage
    token: int
    patient_info: PatientInfo = field(default_factory=PatientInfo)


@dataclass(frozen=True)
class Succeeded:
    image: UploadedImage
    result: PredictionResult
    timestamp: str
    model_accuracy: Optional[float] = None
    patient_info: PatientInfo = field(default_factory=PatientInfo)


@dataclass(frozen=True)
class Failed:
    image: UploadedImage
    message: str


WorkflowState = Union[Idle, Validating, Ready, Submitting, Succeeded, Failed]


@dataclass(frozen=True)
class PendingSubmission:
    """A request the caller must send, and the token to hand back with its response."""
    token: int
    request: PredictionRequest


class AnalysisWorkflow:
    """Single-session controller for one retinal image analysis at a time."""

    def __init__(
        self,
        intake: Optional[ImageIntake] = None,
        on_state_changed: Optional[StateCallback] = None,
    ):
        self._intake = intake or ImageIntake()
        self._on_state_changed = on_state_changed
        self._state: WorkflowState = Idle()
        self._patient_info = PatientInfo()
        self._token = 0

    # --- Accessors ---

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def patient_info(self) -> PatientInfo:
        return replace(self._patient_info)

    @property
    def image(self) -> Optional[UploadedImage]:
        return getattr(self._state, "image", None)

    @property
    def error(self) -> str:
        return self._state.message if isinstance(self._state, Failed) else ""

    @property
    def result(self) -> Optional[PredictionResult]:
        return self._state.result if isinstance(self._state, Succeeded) else None

    @property
    def is_processing(self) -> bool:
        return isinstance(self._state, Submitting)

    # --- Transitions ---

    def select(self, file_path: str, media_type: Optional[str] = None) -> Optional[ValidationError]:
        """Validate a newly selected file.

        Returns None on acceptance (state becomes Ready) or the ValidationError
        on rejection, in which case the previous state is restored exactly.
        Only an accepted selection supersedes an in-flight submission.
        """
        previous = self._state
        self._set_state(Validating(file_name=str(file_path)))
        try:
            image = self._intake.validate(file_path, media_type)
        except ValidationError as e:
            self._set_state(previous)
            return e
        self._token += 1
        self._set_state(Ready(image=image))
        return None

    def update_patient_info(self, **fields):
        """Replace one or more patient fields (id, age, eye)."""
        self._patient_info = replace(self._patient_info, **fields)

    def set_patient_info(self, info: PatientInfo):
        self._patient_info = replace(info)

    def submit(self) -> Optional[PendingSubmission]:
        """Enter Submitting and return the request to send.

        Returns None when a submission is already in flight. Raises
        NoImageSelected when there is nothing to submit.
        """
        if isinstance(self._state, Submitting):
            logger.debug("Submit ignored: request %d still in flight", self._state.token)
            return None
        image = self.image
        if image is None:
            raise NoImageSelected()

        self._token += 1
        request = PredictionRequest(image=image.data_url, patient_info=replace(self._patient_info))
        self._set_state(Submitting(image=image, token=self._token, patient_info=request.patient_info))
        logger.info("Submitting %s as request %d", image.file_name, self._token)
        return PendingSubmission(token=self._token, request=request)

    def complete(self, token: int, response: PredictionResponse) -> bool:
        """Apply a service response. Returns False if it was stale and discarded."""
        state = self._state
        if not isinstance(state, Submitting) or state.token != token:
            logger.info("Discarding stale response for request %d", token)
            return False

        if response.success and response.prediction is not None:
            self._set_state(Succeeded(
                image=state.image,
                result=response.prediction,
                timestamp=response.timestamp or now_iso(),
                model_accuracy=response.model_accuracy,
                patient_info=state.patient_info,
            ))
        else:
            message = response.error.strip() if response.error else ""
            self._set_state(Failed(image=state.image, message=message or MSG_CONNECTION))
        return True

    def analyze(self, client: PredictionClient) -> WorkflowState:
        """Submit and wait for the response on the calling thread."""
        pending = self.submit()
        if pending is not None:
            self.complete(pending.token, client.predict(pending.request))
        return self._state

    def reset(self):
        """Hard clear: image, patient info, result and error all go."""
        self._token += 1
        self._patient_info = PatientInfo()
        self._set_state(Idle())

    def _set_state(self, state: WorkflowState):
        logger.debug("%s -> %s", type(self._state).__name__, type(state).__name__)
        self._state = state
        if self._on_state_changed:
            self._on_state_changed(state)
