# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/user'
USER_CREATE = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_ME = USER_BASE

# Table catalog routes
TABLE_BASE = f'{API_BASE}/table'
TABLE_LIST = TABLE_BASE
TABLE_SEED = f'{TABLE_BASE}/seed'

# Reservation routes
RESERVATION_BASE = f'{API_BASE}/reservation'
RESERVATION_CREATE = RESERVATION_BASE
RESERVATION_LIST = RESERVATION_BASE
RESERVATION_AVAILABILITY = f'{RESERVATION_BASE}/availability'
RESERVATION_GET = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_CANCEL = f'{RESERVATION_BASE}/{{reservation_id}}'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
