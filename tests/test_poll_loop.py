"""Tests for the acquisition & poll loop, driven by synthetic ticks."""

import pytest

from lumitree.core.poll_loop import PollLoop
from lumitree.domain.enums import InteractionMode, LoopStatus
from lumitree.domain.errors import InitializationFailure, InvalidInput


# =============================================================================
# Acquisition
# =============================================================================


class TestAcquisition:
    def test_uninitialized_until_handed_off(self, make_loop, scheduler):
        loop = make_loop()
        loop.start()
        assert loop.status is LoopStatus.UNINITIALIZED
        assert scheduler.run_next()
        assert loop.status is LoopStatus.ACTIVE

    def test_status_callbacks(self, make_loop, scheduler):
        loop = make_loop()
        statuses = []
        loop.subscribe_status(statuses.append)
        loop.start()
        scheduler.run_next()
        loop.stop()
        assert statuses == [LoopStatus.ACTIVE, LoopStatus.STOPPED]

    def test_start_twice_raises(self, active_loop):
        loop = active_loop()
        with pytest.raises(RuntimeError):
            loop.start()

    def test_video_failure_fails_the_loop(self, fakes, mode_state, scheduler):
        def broken_camera():
            raise OSError("no camera")

        landmarks = fakes.Landmarks()
        loop = PollLoop(broken_camera, lambda: landmarks, mode_state, scheduler,
                        executor=fakes.ImmediateExecutor())
        loop.start()
        scheduler.run_next()

        assert loop.status is LoopStatus.FAILED
        assert isinstance(loop.last_error, InitializationFailure)
        assert landmarks.close_calls == 0
        assert scheduler.pending == 0

    def test_source_failure_releases_video(self, fakes, mode_state, scheduler):
        video = fakes.Video([1.0])

        def broken_model():
            raise InitializationFailure("model missing")

        loop = PollLoop(lambda: video, broken_model, mode_state, scheduler,
                        executor=fakes.ImmediateExecutor())
        loop.start()
        scheduler.run_next()

        assert loop.status is LoopStatus.FAILED
        assert str(loop.last_error) == "model missing"
        assert video.release_calls == 1
        assert video.reads == 0

    def test_owned_executor_is_created_and_shut_down(self, fakes, mode_state, scheduler):
        video, landmarks = fakes.Video([1.0]), fakes.Landmarks()
        loop = PollLoop(lambda: video, lambda: landmarks, mode_state, scheduler)
        loop.start()
        loop.stop()
        assert loop.status is LoopStatus.STOPPED


# =============================================================================
# Polling
# =============================================================================


class TestPolling:
    def test_one_set_per_processed_frame(self, fakes, active_loop, scheduler, recorded_modes):
        loop = active_loop(video=fakes.Video([10.0, 20.0, 30.0]))
        for _ in range(3):
            scheduler.run_next()
        assert len(recorded_modes) == 3
        assert loop.frames_processed == 3
        assert loop.frame_cursor == 30.0

    def test_repeated_timestamp_is_skipped(self, fakes, active_loop, scheduler, recorded_modes):
        landmarks = fakes.Landmarks()
        loop = active_loop(video=fakes.Video([100.0, 100.0]), landmarks=landmarks)
        scheduler.run_next()
        scheduler.run_next()
        assert recorded_modes == [InteractionMode.NORMAL]
        assert landmarks.calls == [100.0]
        assert loop.frames_skipped == 1

    def test_older_frame_is_skipped(self, fakes, active_loop, scheduler):
        landmarks = fakes.Landmarks()
        loop = active_loop(video=fakes.Video([1.0, 3.0, 2.0, 4.0]), landmarks=landmarks)
        for _ in range(4):
            scheduler.run_next()
        assert landmarks.calls == [1.0, 3.0, 4.0]
        assert loop.frames_skipped == 1

    def test_no_frame_yet_keeps_polling(self, fakes, active_loop, scheduler, recorded_modes):
        video = fakes.Video([])
        loop = active_loop(video=video)
        scheduler.run_next()
        scheduler.run_next()
        assert video.reads == 2
        assert recorded_modes == []
        assert loop.frame_cursor is None
        assert scheduler.pending == 1

    def test_detected_hand_sets_mode(self, fakes, active_loop, scheduler, mode_state, make_snapshot):
        snap = make_snapshot((0.85, 0.5))
        active_loop(video=fakes.Video([1.0]), landmarks=fakes.Landmarks([snap]))
        scheduler.run_next()
        assert mode_state.current is InteractionMode.ROTATE_RIGHT

    def test_frame_callback(self, fakes, make_loop, scheduler, make_snapshot):
        snap = make_snapshot((0.5, 0.9))
        loop = make_loop(video=fakes.Video([5.0]), landmarks=fakes.Landmarks([snap]))
        seen = []
        loop.subscribe_frames(lambda frame, s, mode: seen.append((frame.timestamp_ms, s, mode)))
        loop.start()
        scheduler.run_next()
        scheduler.run_next()
        assert seen == [(5.0, snap, InteractionMode.FAST)]

    def test_invalid_landmarks_count_as_no_hand(self, fakes, active_loop, scheduler, mode_state, recorded_modes):
        mode_state.set(InteractionMode.FAST)
        recorded_modes.clear()
        loop = active_loop(video=fakes.Video([1.0]),
                           landmarks=fakes.Landmarks(error=InvalidInput("20 points")))
        scheduler.run_next()
        assert recorded_modes == [InteractionMode.NORMAL]
        assert loop.status is LoopStatus.ACTIVE
        assert loop.frames_processed == 1

    def test_unexpected_error_fails_and_releases(self, fakes, active_loop, scheduler, mode_state):
        video = fakes.Video([1.0])
        landmarks = fakes.Landmarks(error=RuntimeError("session lost"))
        mode_state.set(InteractionMode.FROZEN)
        loop = active_loop(video=video, landmarks=landmarks)
        scheduler.run_next()

        assert loop.status is LoopStatus.FAILED
        assert isinstance(loop.last_error, RuntimeError)
        assert mode_state.current is InteractionMode.NORMAL
        assert video.release_calls == 1
        assert landmarks.close_calls == 1
        assert scheduler.pending == 0


# =============================================================================
# Failure recovery
# =============================================================================


class TestFailureRecovery:
    def test_broken_mode_consumer_fails_the_loop(self, fakes, active_loop, scheduler, mode_state):
        def broken(mode):
            raise RuntimeError("consumer broke")

        mode_state.subscribe(broken)
        video, landmarks = fakes.Video([1.0]), fakes.Landmarks()
        loop = active_loop(video=video, landmarks=landmarks)

        scheduler.run_next()    # must not raise into the host

        assert loop.status is LoopStatus.FAILED
        assert isinstance(loop.last_error, RuntimeError)
        assert mode_state.current is InteractionMode.NORMAL
        assert video.release_calls == 1
        assert landmarks.close_calls == 1
        assert scheduler.pending == 0

    def test_failed_acquisition_resets_mode(self, fakes, active_loop, scheduler, mode_state, make_snapshot):
        first = active_loop(video=fakes.Video([1.0]),
                            landmarks=fakes.Landmarks([make_snapshot(openness=0.5)]))
        scheduler.run_next()
        first.stop()
        assert mode_state.current is InteractionMode.FROZEN

        def broken_camera():
            raise OSError("no camera")

        second = PollLoop(broken_camera, fakes.Landmarks, mode_state, scheduler,
                          executor=fakes.ImmediateExecutor())
        second.start()
        scheduler.run_next()

        assert second.status is LoopStatus.FAILED
        assert mode_state.current is InteractionMode.NORMAL

    def test_failed_status_is_reported_after_mode_reset(self, fakes, scheduler, mode_state):
        events = []
        mode_state.subscribe(lambda mode: events.append(mode))

        def broken_camera():
            raise OSError("no camera")

        loop = PollLoop(broken_camera, fakes.Landmarks, mode_state, scheduler,
                        executor=fakes.ImmediateExecutor())
        loop.subscribe_status(events.append)
        loop.start()
        scheduler.run_next()

        assert events == [InteractionMode.NORMAL, LoopStatus.FAILED]


# =============================================================================
# Teardown
# =============================================================================


class TestStop:
    def test_releases_each_resource_once(self, fakes, active_loop, scheduler):
        video, landmarks = fakes.Video([1.0]), fakes.Landmarks()
        loop = active_loop(video=video, landmarks=landmarks)
        scheduler.run_next()
        loop.stop()
        loop.stop()
        assert video.release_calls == 1
        assert landmarks.close_calls == 1
        assert loop.status is LoopStatus.STOPPED

    def test_no_ticks_after_stop(self, fakes, active_loop, scheduler, recorded_modes):
        loop = active_loop(video=fakes.Video([1.0, 2.0]))
        loop.stop()
        assert scheduler.pending == 0
        assert not scheduler.run_next()
        assert recorded_modes == []

    def test_stop_before_start(self, make_loop):
        loop = make_loop()
        loop.stop()
        assert loop.status is LoopStatus.STOPPED

    def test_stop_while_acquiring(self, fakes, make_loop, scheduler):
        executor = fakes.DeferredExecutor()
        video, landmarks = fakes.Video([1.0]), fakes.Landmarks()
        loop = make_loop(video=video, landmarks=landmarks, executor=executor)
        loop.start()
        loop.stop()
        executor.finish()

        assert loop.status is LoopStatus.STOPPED
        assert video.release_calls == 1
        assert landmarks.close_calls == 1
        assert scheduler.pending == 0
        assert video.reads == 0

    def test_stop_between_hand_off_and_host_callback(self, fakes, make_loop, scheduler):
        video, landmarks = fakes.Video([1.0]), fakes.Landmarks()
        loop = make_loop(video=video, landmarks=landmarks)
        loop.start()
        loop.stop()
        # released on the spot, before the host thread picks the hand-off up
        assert video.release_calls == 1
        assert landmarks.close_calls == 1

        scheduler.run_next()

        assert loop.status is LoopStatus.STOPPED
        assert video.release_calls == 1
        assert landmarks.close_calls == 1
        assert scheduler.pending == 0

    def test_release_failure_does_not_block_other_release(self, fakes, active_loop):
        video = fakes.Video([1.0], fail_release=True)
        landmarks = fakes.Landmarks()
        loop = active_loop(video=video, landmarks=landmarks)
        loop.stop()

        assert landmarks.close_calls == 1
        assert video.release_calls == 1
        failures = loop.release_failures
        assert len(failures) == 1
        assert failures[0].resource == "video source"
        assert isinstance(failures[0].cause, OSError)
        assert loop.status is LoopStatus.STOPPED
