from ngo_dashboard import create_app, db
import os

app = create_app()

if __name__ == "__main__":
    try:
        app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
    finally:
        # Release pooled connections on shutdown
        with app.app_context():
            db.engine.dispose()
