import numpy as np
import pytest

from ingredient_alert.camera import camera_initializer
from ingredient_alert.camera.capture_source import CaptureSource
from ingredient_alert.errors import CameraError
from ingredient_alert.speech import speaker as speaker_module
from ingredient_alert.speech.speaker import NullSpeaker, Speaker, build_speaker


class FakeVideoCapture:
    """index 가 working 안에 있을 때만 열리는 가짜 cv2.VideoCapture"""

    working = {1}

    def __init__(self, index):
        self.index = index
        self.released = False
        self.props = {}

    def isOpened(self):
        return self.index in self.working

    def set(self, prop, value):
        self.props[prop] = value

    def read(self):
        return True, np.full((4, 4, 3), self.index, dtype=np.uint8)

    def release(self):
        self.released = True


@pytest.fixture
def fake_cv2_capture(monkeypatch):
    monkeypatch.setattr(camera_initializer.cv2, "VideoCapture", FakeVideoCapture)


def test_init_camera_auto_picks_first_working(fake_cv2_capture):
    cap = camera_initializer.init_camera({"camera_index": "auto", "camera_probe_max": 3})
    assert cap.index == 1


def test_init_camera_fixed_index(fake_cv2_capture):
    assert camera_initializer.init_camera({"camera_index": 0}) is None
    assert camera_initializer.init_camera({"camera_index": "1"}).index == 1


def test_capture_source_open_fails_without_camera(fake_cv2_capture):
    with pytest.raises(CameraError):
        CaptureSource.open({"camera_index": 0})


def test_snapshot_is_an_owned_copy(fake_cv2_capture):
    source = CaptureSource.open({"camera_index": 1})
    assert source.read()

    snap = source.snapshot()
    snap[:] = 0

    assert source.current_frame()[0, 0, 0] == 1
    source.release()
    assert source.cap.released


class FakeTtsEngine:
    def __init__(self):
        self.said = []
        self.props = {}

    def setProperty(self, name, value):
        self.props[name] = value

    def say(self, text):
        self.said.append(text)

    def runAndWait(self):
        pass


def test_speaker_speaks_on_worker_thread(monkeypatch):
    engine = FakeTtsEngine()
    monkeypatch.setattr(speaker_module.pyttsx3, "init", lambda: engine)

    speaker = Speaker(rate=120)
    speaker.speak("hello")
    speaker.speak("world")
    speaker.close()
    speaker._thread.join(timeout=5)

    assert engine.said == ["hello", "world"]
    assert engine.props["rate"] == 120


def test_speaker_survives_tts_failure(monkeypatch, capsys):
    def broken_init():
        raise RuntimeError("no espeak")

    monkeypatch.setattr(speaker_module.pyttsx3, "init", broken_init)

    speaker = Speaker()
    speaker.speak("hello")
    speaker.close()
    speaker._thread.join(timeout=5)

    assert not speaker._thread.is_alive()
    assert "no espeak" in capsys.readouterr().out


def test_build_speaker_respects_toggle():
    assert isinstance(build_speaker({"enable_speech": False}), NullSpeaker)
