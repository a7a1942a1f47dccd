import os
import dotenv
dotenv.load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))

# Flask configuration
SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
DEBUG = os.environ.get('FLASK_DEBUG', '1') == '1'

# Local storage database (fallback cache + persisted settings)
if os.environ.get('VERCEL'):
    # Vercel filesystem is read-only, use ephemeral /tmp
    SQLALCHEMY_DATABASE_URI = 'sqlite:////tmp/yoga_booking.db'
else:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'yoga_booking.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Instructor dashboard password
ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'sophie0902')

# Google Apps Script endpoint fronting the registration spreadsheet
DEFAULT_SCRIPT_URL = os.environ.get(
    'DEFAULT_SCRIPT_URL',
    'https://script.google.com/macros/s/AKfycby4opi6oUVwrGwJhQHNatkVji2yP0tLqC3JUpadcSxsUlruQEbj3SXQ1QauAzFpw0EEQw/exec'
)
REMOTE_TIMEOUT = float(os.environ.get('REMOTE_TIMEOUT', '30'))

# Gemini summary generation
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY', '')
SUMMARY_MODEL = os.environ.get('SUMMARY_MODEL', 'gemini-2.5-flash')
SUMMARY_LANGUAGE = os.environ.get('SUMMARY_LANGUAGE', 'Traditional Chinese')

# Studio details
STUDIO_TIMEZONE = os.environ.get('STUDIO_TIMEZONE', 'Asia/Taipei')
PRICE_PER_CLASS = 400
STUDIO_INFO = {
    'instructor': 'Sophie',
    'line_id': '@tungmei0902',
    'location': '辛亥路四段 199 號興昌里區居民活動中心 2F',
    'location_note': '辛亥捷運站斜對面，走路三分鐘之內',
    'rules': '六人以上開課 （教室一：8人滿班; 教室二：16人滿班）',
    'makeup_policy': (
        '若您因故請假，可於本月堂課期間內完成補課。\n'
        '請於課前透過 Line 告知，將協助安排補課時段（彈性安排，依照教室與學員狀況調整）。'
    ),
    'payment_info': [
        {'type': '頭份郵局 (700)', 'account': '0291290-0193549', 'name': '林冬梅'},
        {'type': '中國信託 (822) 復興分行', 'account': '635540045178', 'name': ''},
        {'type': 'LinePay', 'link': 'https://line.me/ti/p/an0yR-Lra2'},
    ],
}
