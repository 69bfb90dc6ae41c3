"""
SignBridge - Real-time sign recognition from hand landmarks

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SignBridge - Sign Recognition from Hand Landmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Frames a sign must hold before it is shown (overrides config)",
    )

    parser.add_argument(
        "--hands",
        type=int,
        default=None,
        help="Maximum number of hands to track (overrides config)",
    )

    parser.add_argument(
        "--release-after",
        type=int,
        default=None,
        help="Clear the shown sign after this many frames without one (default: keep it)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run in an OpenCV window with landmark overlay instead of the Qt UI",
    )

    return parser.parse_args(argv)


def apply_overrides(config, args):
    """Apply CLI overrides to a loaded config. Overridden sections are re-validated."""
    from dataclasses import replace

    stability = {}
    if args.threshold is not None:
        stability['threshold'] = args.threshold
    if args.release_after is not None:
        stability['release_after'] = args.release_after
    if stability:
        config.stability = replace(config.stability, **stability)
    if args.hands is not None:
        config.mediapipe = replace(config.mediapipe, max_num_hands=args.hands)
    return config


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks,
    raw and committed labels per hand.
    """
    import time
    import cv2
    from signbridge import GesturePipeline
    from signbridge.classifier import extract_features
    from webcam import HandTracker, draw_hands

    tracker = HandTracker(config)
    pipeline = GesturePipeline(config)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not open camera")
        return 1

    try:
        while True:
            poses = tracker.get_hands()
            if poses is None:
                print("WARNING: Failed to read camera frame")
                time.sleep(0.1)
                continue

            result = pipeline.process_frame(poses)

            for hand in result.changes:
                print(f"[{tracker.frame_count:5d}] {hand.hand_id}: {hand.committed_label}")

            frame = tracker.last_frame
            if frame is not None:
                frame = draw_hands(frame, poses, result.committed)
                for i, (pose, hand) in enumerate(zip(poses, result.hands)):
                    run = pipeline.arena.tracker(hand.hand_id).run_length
                    features = extract_features(pose)
                    line = (
                        f"{hand.hand_id} raw: {hand.raw_label or '-'} run: {run} "
                        f"thumb-index: {features.thumb_index_distance:.3f} "
                        f"thumb-wrist: {features.thumb_wrist_distance:.3f}"
                    )
                    cv2.putText(
                        frame, line, (10, 30 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )
                cv2.imshow("SignBridge Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run SignBridge with the Qt label window (Multithreaded)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from webcam import WebcamWorker
    from ui import LabelWindow

    app = QApplication(sys.argv)

    window = LabelWindow(show_preview=config.ui.show_preview)
    window.show()

    thread = QThread()
    worker = WebcamWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_change(hand_id, label):
        print(f"Sign: {hand_id} -> {label}")

    # QueuedConnection keeps UI updates on the main thread
    thread.started.connect(worker.start_process)
    worker.labels_updated.connect(window.set_labels, Qt.QueuedConnection)
    worker.gesture_changed.connect(handle_change, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from signbridge import load_config
    try:
        config = apply_overrides(load_config(args.config), args)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    print("SignBridge starting...")
    print(f"  Hands: {config.mediapipe.max_num_hands}")
    print(f"  Stability threshold: {config.stability.threshold} frames")
    release = config.stability.release_after
    print(f"  Release after: {'never' if release is None else f'{release} frames'}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
