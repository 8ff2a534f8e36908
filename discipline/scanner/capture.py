import logging
from enum import Enum
from typing import Callable, Optional

from .decoding import decode_frame, open_camera

logger = logging.getLogger(__name__)

CAMERA_ERROR = "Error: No se pudo acceder a la cámara. Revisa los permisos."


class CaptureState(Enum):
    IDLE = "idle"
    REQUESTING_CAMERA = "requesting-camera"
    STREAMING = "streaming"
    DECODED = "decoded"


TRANSITIONS = {
    CaptureState.IDLE: {CaptureState.REQUESTING_CAMERA},
    CaptureState.REQUESTING_CAMERA: {CaptureState.STREAMING, CaptureState.IDLE},
    CaptureState.STREAMING: {CaptureState.DECODED, CaptureState.IDLE},
    CaptureState.DECODED: {CaptureState.IDLE},
}


class InvalidTransition(Exception):
    pass


class BarcodeCapture:
    """
    One scan of a student card.

    idle -> requesting-camera -> streaming -> decoded -> idle

    The first decoded string is handed to ``on_decoded`` exactly once and the
    camera is released. Frames that fail to decode are skipped silently. If
    the camera cannot be opened, ``on_error`` receives the user-facing message
    and the capture goes back to idle without emitting anything.
    """

    def __init__(
        self,
        camera_factory: Optional[Callable[[], object]] = None,
        decoder: Optional[Callable[[object], Optional[str]]] = None,
        on_decoded: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        camera_index: int = 0,
    ):
        self._camera_factory = camera_factory or (lambda: open_camera(camera_index))
        self._decoder = decoder or decode_frame
        self._on_decoded = on_decoded or (lambda code: None)
        self._on_error = on_error or (lambda message: None)
        self._camera = None
        self._state = CaptureState.IDLE
        self.error: Optional[str] = None
        self.result: Optional[str] = None

    @property
    def state(self) -> CaptureState:
        return self._state

    def _move(self, target: CaptureState):
        if target not in TRANSITIONS[self._state]:
            raise InvalidTransition(f"{self._state.value} -> {target.value}")
        logger.debug("capture %s -> %s", self._state.value, target.value)
        self._state = target

    def _release(self):
        camera, self._camera = self._camera, None
        if camera is not None:
            camera.release()

    def start(self) -> bool:
        self._move(CaptureState.REQUESTING_CAMERA)
        self.error = None
        self.result = None
        try:
            self._camera = self._camera_factory()
        except Exception:
            logger.exception("Could not acquire camera")
            self.error = CAMERA_ERROR
            self._move(CaptureState.IDLE)
            self._on_error(CAMERA_ERROR)
            return False
        self._move(CaptureState.STREAMING)
        return True

    def feed(self, frame) -> Optional[str]:
        if self._state is not CaptureState.STREAMING:
            raise InvalidTransition(f"cannot decode while {self._state.value}")
        try:
            code = self._decoder(frame)
        except Exception:
            # most frames hold no readable code
            return None
        if not code:
            return None

        self._move(CaptureState.DECODED)
        self.result = code
        try:
            self._on_decoded(code)
        finally:
            self.stop()
        return code

    def stop(self):
        self._release()
        if self._state is not CaptureState.IDLE:
            self._move(CaptureState.IDLE)

    def run(self, max_frames: Optional[int] = None) -> Optional[str]:
        """Start if needed and read frames until a code is decoded or ``max_frames`` run out."""
        if self._state is CaptureState.IDLE and not self.start():
            return None
        frames = 0
        try:
            while self._state is CaptureState.STREAMING:
                if max_frames is not None and frames >= max_frames:
                    break
                frames += 1
                ok, frame = self._camera.read()
                if not ok:
                    continue
                code = self.feed(frame)
                if code:
                    return code
        finally:
            if self._state is not CaptureState.IDLE:
                self.stop()
        return None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.stop()
        return False
