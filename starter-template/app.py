"""
Quillpress Starter
==================

A ready-to-run blog with every Quillpress module enabled.

Run with:
    python app.py

Visit:
    http://localhost:5000        - Homepage
    http://localhost:5000/admin  - Admin login
"""

from quillpress import create_app
from quillpress.core.config import Config

app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Quillpress Starter")
    print("=" * 60)
    print(f"Homepage:        http://localhost:{Config.port}")
    print(f"Admin Login:     http://localhost:{Config.port}/admin")
    print(f"Dashboard:       http://localhost:{Config.port}/admin/dashboard")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
