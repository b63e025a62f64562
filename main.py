"""
AirInk - Air-Writing with Hand Tracking

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirInk - pinch to draw in the air",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device id (overrides config)",
    )

    parser.add_argument(
        "--brush-size",
        type=int,
        default=None,
        help="Initial brush size (overrides config)",
    )

    parser.add_argument(
        "--color",
        default=None,
        help="Initial brush colour as #rrggbb (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run in an OpenCV window without the Qt UI",
    )

    return parser.parse_args(argv)


def run_debug(config):
    """
    Run drawing in a plain OpenCV window.
    Useful for tuning pinch and smoothing parameters.
    """
    import time
    import cv2
    from src.canvas import CanvasRenderer
    from src.drawing import DrawingSession
    from src.webcam import HandTracker
    from src.webcam.hand_tracker import READ_RETRY_DELAY

    tracker = HandTracker(config)
    cam = config.camera
    renderer = CanvasRenderer(cam.width, cam.height, config.brush, show_skeleton=config.ui.show_skeleton)
    session = DrawingSession(config.drawing, renderer.size)

    print("Starting debug mode...")
    print("Keys: q quit, c clear, s save, +/- brush size")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracking")
        return 1

    was_pinching = False
    code = 0
    try:
        while True:
            ok, hand = tracker.get_hand()
            if not ok:
                if tracker.camera_lost:
                    print("ERROR: Camera stopped delivering frames")
                    code = 1
                    break
                time.sleep(READ_RETRY_DELAY)
                continue

            frame_size = tracker.frame_size
            if frame_size is not None and frame_size != renderer.size:
                renderer.set_canvas_size(*frame_size)
                session.resize(*frame_size)

            commands = session.process_frame(hand)
            renderer.apply(commands)
            background = tracker.last_frame if config.ui.show_camera else None
            frame = renderer.compose(background)

            pinching = session.pinch.is_pinching
            if pinching != was_pinching:
                print(f"[{tracker.frame_count:5d}] pen {'DOWN' if pinching else 'UP'}")
                was_pinching = pinching

            avg = session.pinch.average_distance
            info_lines = [
                f"Pinch: {session.pinch.state.name}",
                f"Avg dist: {avg:.3f}" if avg is not None else "Avg dist: -",
                f"Motion: {session.smoother.motion_speed.name}",
                f"Brush: {renderer.brush_size} {renderer.brush_color}",
            ]
            for i, line in enumerate(info_lines):
                cv2.putText(
                    frame, line, (10, 30 + i * 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                )

            cv2.imshow("AirInk Debug", frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('c'):
                renderer.clear_drawing()
            elif key == ord('s'):
                path = renderer.save_png(Path(config.ui.save_dir))
                print(f"Saved drawing to {path}")
            elif key in (ord('+'), ord('=')):
                renderer.set_brush_size(renderer.brush_size + 1)
            elif key == ord('-'):
                renderer.set_brush_size(renderer.brush_size - 1)

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return code


def run_window_mode(config):
    """Run AirInk with the Qt window (drawing runs on a worker thread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from src.ui import CanvasWindow
    from src.webcam import WebcamWorker

    app = QApplication(sys.argv)

    window = CanvasWindow(config.brush)
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

    def handle_error(msg):
        print(f"WORKER ERROR: {msg}")
        window.set_status(f"Error: {msg}")

    # Worker -> UI (queued so widgets are only touched on the GUI thread)
    thread.started.connect(worker.start_process)
    worker.frame_ready.connect(window.set_frame, Qt.QueuedConnection)
    worker.hand_found.connect(window.hide_hint, Qt.QueuedConnection)
    worker.hand_lost.connect(window.show_hint, Qt.QueuedConnection)
    worker.status.connect(window.set_status, Qt.QueuedConnection)
    worker.error.connect(handle_error, Qt.QueuedConnection)

    # UI -> worker (direct calls, the worker loop never idles in an event loop)
    window.clear_requested.connect(worker.clear_canvas, Qt.DirectConnection)
    window.save_requested.connect(lambda: worker.save_image(), Qt.DirectConnection)
    window.brush_size_changed.connect(worker.set_brush_size, Qt.DirectConnection)
    window.color_changed.connect(worker.set_brush_color, Qt.DirectConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from src.config import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.camera is not None:
        config.camera.device_id = args.camera
    if args.brush_size is not None:
        config.brush.default_size = max(config.brush.min_size, min(config.brush.max_size, args.brush_size))
    if args.color:
        config.brush.default_color = args.color

    from src.canvas import parse_hex_color
    try:
        parse_hex_color(config.brush.default_color)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    print("AirInk starting...")
    print(f"  Camera: {config.camera.device_id} ({config.camera.width}x{config.camera.height})")
    print(f"  Pinch threshold: {config.drawing.pinch_threshold}")
    print(f"  Brush: {config.brush.default_size}px {config.brush.default_color}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_debug(config)
    return run_window_mode(config)


if __name__ == "__main__":
    sys.exit(main())
