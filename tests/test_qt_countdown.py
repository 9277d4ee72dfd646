import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from quiztaker.core.models import SubmitReason  # noqa: E402
from quiztaker.core.services.qt_countdown import QtCountdownDriver  # noqa: E402
from quiztaker.core.services.quiz_session import QuizSession  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def _run_loop(driver, timeout_ms=3000):
    loop = QtCore.QEventLoop()
    driver.expired.connect(loop.quit)
    QtCore.QTimer.singleShot(timeout_ms, loop.quit)
    loop.exec()


def test_driver_ticks_session_to_auto_submit(qt_app, scenario_questions):
    session = QuizSession(scenario_questions, duration_seconds=3)
    driver = QtCountdownDriver(session.countdown, interval_ms=5)
    ticks = []
    driver.ticked.connect(ticks.append)

    driver.start()
    _run_loop(driver)

    assert ticks == [2, 1, 0]
    assert session.is_submitted
    assert session.result.submit_reason is SubmitReason.TIME_EXPIRED
    assert not driver.is_active()


def test_manual_submit_stops_the_qt_timer(qt_app, scenario_questions):
    session = QuizSession(scenario_questions, duration_seconds=60)
    driver = QtCountdownDriver(session.countdown, interval_ms=5)
    driver.start()
    assert driver.is_active()

    result = session.submit()

    assert not driver.is_active()
    loop = QtCore.QEventLoop()
    QtCore.QTimer.singleShot(50, loop.quit)
    loop.exec()
    assert session.remaining_seconds == 60
    assert session.result is result


def test_driver_does_not_start_for_a_closed_countdown(qt_app, scenario_questions):
    session = QuizSession(scenario_questions, duration_seconds=60)
    session.submit()
    driver = QtCountdownDriver(session.countdown, interval_ms=5)
    driver.start()
    assert not driver.is_active()
