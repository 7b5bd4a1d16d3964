from concurrent.futures import Future

import numpy as np
import pytest

from ingredient_alert.errors import OcrError
from ingredient_alert.ocr.ocr_worker import OcrOutcome


class FakeCapture:
    """snapshot() 호출 횟수를 기록하는 가짜 카메라"""

    def __init__(self, frame=None):
        self.frame = frame if frame is not None else np.zeros((480, 640, 3), dtype=np.uint8)
        self.snapshots = 0

    def current_frame(self):
        return self.frame

    def snapshot(self):
        self.snapshots += 1
        return self.frame.copy()


class FakeRecognizer:
    """OcrWorker.submit 대신 쓰는 가짜. 아직 끝나지 않은 Future 를 돌려줌"""

    def __init__(self):
        self.calls = []
        self.futures = []

    def __call__(self, image):
        self.calls.append(image)
        future = Future()
        self.futures.append(future)
        return future


class FakeSpeaker:
    def __init__(self):
        self.utterances = []

    def speak(self, utterance):
        self.utterances.append(utterance)

    def close(self):
        pass


class FakeOcrEngine:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def recognize(self, image):
        if self.error is not None:
            raise self.error
        return self.text


def ok(text):
    return OcrOutcome(text=text)


def failed(message="boom"):
    return OcrOutcome(error=OcrError(message))


@pytest.fixture
def capture():
    return FakeCapture()


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def speaker():
    return FakeSpeaker()
