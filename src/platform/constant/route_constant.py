# API Route Constants

# Auth routes
AUTHEN_BASE = '/authen'
AUTHEN_SIGNUP = f'{AUTHEN_BASE}/signup'
AUTHEN_LOGIN = f'{AUTHEN_BASE}/login'

# User routes
USER_BASE = '/user'
USER_ME = f'{USER_BASE}/me'

# Restaurant routes
RESTAURANT_BASE = '/restaurant'
RESTAURANT_LIST = RESTAURANT_BASE
RESTAURANT_BY_CATEGORY = f'{RESTAURANT_BASE}/category/{{category}}'
RESTAURANT_GET = f'{RESTAURANT_BASE}/{{restaurant_id}}'

# Food routes
FOOD_BASE = '/food'
FOOD_BY_RESTAURANT = f'{FOOD_BASE}/restaurant/{{restaurant_id}}'
FOOD_GET = f'{FOOD_BASE}/restaurant/{{restaurant_id}}/{{food_id}}'

# Reservation routes
RESERVATION_BASE = '/reservation'
RESERVATION_LIST = RESERVATION_BASE
RESERVATION_MY = f'{RESERVATION_BASE}/user'
RESERVATION_GET = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_CREATE = f'{RESERVATION_BASE}/{{restaurant_id}}'
RESERVATION_UPDATE = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_DELETE = f'{RESERVATION_BASE}/{{reservation_id}}'
