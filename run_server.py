"""Flask server that stays alive"""

import os
import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

from app import create_app


def main() -> None:
    app = create_app(bootstrap_runtime=True)
    port = int(os.environ.get("FLASK_RUN_PORT", 8000))

    print(f"Server starting on http://0.0.0.0:{port}")
    print("Press Ctrl+C to stop\n")

    try:
        app.run(host="0.0.0.0", port=port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == "__main__":
    main()
