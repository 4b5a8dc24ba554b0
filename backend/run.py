"""
Adrevolution API entry point.

    python run.py                                   # development server
    gunicorn -w 4 -b 0.0.0.0:4999 "run:app"         # production
    flask --app run db upgrade                      # migrations

FLASK_ENV picks the configuration, FLASK_PORT the port of the dev server.
"""

import os
from adrevolution import create_app

app = create_app(os.environ.get('FLASK_ENV', 'development'))

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=app.debug)
