"""
MediaPipe producer for the frame store.

Runs the MediaPipe Hands, Pose and FaceMesh solutions on camera frames and
pushes one LandmarkFrame per cycle into a FrameStore. The conversion from
MediaPipe results is structural (it only reads attributes), so it works on
any object shaped like a MediaPipe result.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

import cv2
import numpy as np

from .config import CaptureConfig, TrackerConfig
from .errors import TrackerUnavailableError
from .tracking.frame import MAX_HANDS, LandmarkFrame
from .tracking.store import FrameStore

logger = logging.getLogger(__name__)


def frame_from_results(
    hands_results: Any = None,
    pose_results: Any = None,
    face_results: Any = None,
    timestamp: Optional[float] = None,
) -> LandmarkFrame:
    """
    Convert MediaPipe solution results into a LandmarkFrame.

    Args:
        hands_results: Result of ``Hands.process`` (uses ``multi_hand_landmarks``)
        pose_results: Result of ``Pose.process`` (uses ``pose_landmarks``)
        face_results: Result of ``FaceMesh.process`` (uses ``multi_face_landmarks``)
        timestamp (float, optional): Capture time of the source image

    Returns:
        LandmarkFrame: Entities missing from the results are absent
    """
    hand_lists = getattr(hands_results, "multi_hand_landmarks", None) or []
    hands = list(hand_lists)[:MAX_HANDS]

    pose = getattr(pose_results, "pose_landmarks", None)

    faces = getattr(face_results, "multi_face_landmarks", None) or []
    face = faces[0] if len(faces) > 0 else None

    return LandmarkFrame(hands=tuple(hands), pose=pose, face=face, timestamp=timestamp)


class MediaPipeTracker:
    """Thin wrapper around the MediaPipe Hands, Pose and FaceMesh solutions."""

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or TrackerConfig()
        # Imported lazily so the rest of the package works without mediapipe
        try:
            import mediapipe as mp
        except ImportError as e:
            raise TrackerUnavailableError(
                "MediaPipe is not installed. Install with: pip install mediapipe"
            ) from e

        cfg = self.config
        solutions = mp.solutions  # type: ignore[attr-defined]
        self._hands = None
        self._pose = None
        self._face = None

        try:
            if cfg.hands:
                self._hands = solutions.hands.Hands(
                    static_image_mode=False,
                    max_num_hands=cfg.max_num_hands,
                    model_complexity=min(cfg.model_complexity, 1),
                    min_detection_confidence=cfg.min_detection_confidence,
                    min_tracking_confidence=cfg.min_tracking_confidence,
                )
            if cfg.pose:
                self._pose = solutions.pose.Pose(
                    static_image_mode=False,
                    model_complexity=min(cfg.model_complexity, 2),
                    enable_segmentation=False,
                    smooth_landmarks=True,
                    min_detection_confidence=cfg.min_detection_confidence,
                    min_tracking_confidence=cfg.min_tracking_confidence,
                )
            if cfg.face:
                self._face = solutions.face_mesh.FaceMesh(
                    static_image_mode=False,
                    max_num_faces=cfg.max_num_faces,
                    refine_landmarks=False,
                    min_detection_confidence=cfg.min_detection_confidence,
                    min_tracking_confidence=cfg.min_tracking_confidence,
                )
        except Exception:
            # Release whatever was built before the failure
            self.close()
            raise

        logger.info(
            "MediaPipe tracker ready (hands=%s, pose=%s, face=%s)",
            cfg.hands,
            cfg.pose,
            cfg.face,
        )

    def process_rgb(
        self, rgb: np.ndarray, timestamp: Optional[float] = None
    ) -> LandmarkFrame:
        """Run every enabled solution on one RGB image (H, W, 3 uint8)."""
        hands_results = self._hands.process(rgb) if self._hands else None
        pose_results = self._pose.process(rgb) if self._pose else None
        face_results = self._face.process(rgb) if self._face else None
        return frame_from_results(hands_results, pose_results, face_results, timestamp)

    def close(self) -> None:
        for solution in (self._hands, self._pose, self._face):
            if solution is not None:
                solution.close()
        self._hands = self._pose = self._face = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class CaptureLoop:
    """
    Background thread that reads camera frames and feeds the frame store.

    Each captured image is run through the tracker and the resulting frame
    replaces the store's current one. Failures on individual images are
    logged and skipped; only opening the camera can raise.
    """

    def __init__(
        self,
        store: FrameStore,
        tracker: Any,
        config: Optional[CaptureConfig] = None,
        capture_factory: Callable[[int], Any] = cv2.VideoCapture,
    ):
        self.store = store
        self.tracker = tracker
        self.config = config or CaptureConfig()
        self._capture_factory = capture_factory
        self._cap = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._last_image: Optional[np.ndarray] = None
        self.processed_frames = 0
        self.failed_frames = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def last_image(self) -> Optional[np.ndarray]:
        """Most recent BGR camera image, for previews."""
        return self._last_image

    def open(self) -> None:
        """Open the camera at the configured capture size."""
        if self._cap is not None:
            return
        cap = self._capture_factory(self.config.camera_index)
        if not cap.isOpened():
            cap.release()
            raise TrackerUnavailableError(
                f"Could not open camera {self.config.camera_index}"
            )
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        self._cap = cap

    def start(self) -> "CaptureLoop":
        if self.running:
            return self

        self.open()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="handsfree2stage-capture", daemon=True
        )
        self._thread.start()
        logger.info(
            "Capture started on camera %d (%dx%d)",
            self.config.camera_index,
            self.config.width,
            self.config.height,
        )
        return self

    def step(self) -> bool:
        """Capture and process one image. Returns False when no image was read."""
        if self._cap is None:
            self.open()
        ok, image = self._cap.read()
        if not ok or image is None:
            return False

        self._last_image = image
        try:
            rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
            frame = self.tracker.process_rgb(rgb, timestamp=time.monotonic())
        except Exception:
            self.failed_frames += 1
            logger.warning("Landmark processing failed; frame skipped", exc_info=True)
            return True

        if self._thread is not None and self._stop_event.is_set():
            # Stopping; the store may already have been cleared
            logger.debug("Discarding frame processed after stop was requested")
            return True

        self.store.ingest(frame)
        self.processed_frames += 1
        return True

    def _run(self) -> None:
        while not self._stop_event.is_set():
            if not self.step():
                # Camera not ready yet, back off briefly
                time.sleep(0.01)

    def stop(self, timeout: float = 2.0) -> None:
        """
        Stop the capture thread, release the camera and clear the store.

        If the thread does not finish within ``timeout`` the camera is kept
        open and the thread stays registered so a later ``stop()`` can finish
        the job; frames it still produces are discarded.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                self.store.clear()
                logger.warning(
                    "Capture thread did not stop within %.1fs; camera left open",
                    timeout,
                )
                return
            self._thread = None
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        self.store.clear()
        logger.info(
            "Capture stopped (%d frames processed, %d failed)",
            self.processed_frames,
            self.failed_frames,
        )

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
