"""Development entry point: ``python app.py``."""

from smart_hr.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
