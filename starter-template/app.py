"""
Backoffice Starter Template
===========================

A ready-to-run Flask application with every backoffice module enabled.

Run with:
    python app.py

Visit:
    http://localhost:8000/admin        - Admin panel
    http://localhost:8000/admin/login  - Admin login
"""

from flask import Flask, redirect, url_for
from backoffice import Backoffice
from config import Config

# Create Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Initialize the backoffice - this registers all modules automatically
backoffice = Backoffice(app, {
    'brand_name': Config.BRAND_NAME,
    'features': {
        'carts': True,
    }
})


@app.route('/')
def index():
    return redirect(url_for('admin.dashboard'))


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print(Config.BRAND_NAME)
    print("=" * 60)
    print(f"Admin Panel:     http://localhost:8000/admin")
    print(f"Admin Login:     http://localhost:8000/admin/login")
    print(f"Storefront API:  {Config.API_BASE_URL}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=8000, debug=True)
