"""
Application Initialization
==========================
Wires the Model, View and Controller together and starts the Qt event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Instantiates the plot state (Model).
3. Instantiates the Main Window (View), which owns the plot controller.
"""
import sys

from surfacegrapher.app import create_app
from surfacegrapher.logging_config import setup_logging_from_env
from surfacegrapher.model.state import PlotState
from surfacegrapher.view.main_window import MainWindow


def main() -> None:
    setup_logging_from_env()

    app = create_app()

    state = PlotState()

    window = MainWindow(state)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
