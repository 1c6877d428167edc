"""
Showcase Platform API server

Run with:
    python app.py

Visit:
    http://localhost:5000/api/projects  - Public projects
    http://localhost:5000/api/clients   - Public testimonials
"""

import logging
from showcase import create_app
from showcase.core import Config

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = create_app()

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Showcase Platform API")
    print("=" * 60)
    print(f"API root:        http://localhost:{Config.port}/")
    print(f"Admin login:     POST http://localhost:{Config.port}/api/auth/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=not app.config.get('TESTING'))
