DEFAULT_PASSWORD = 'P@ssw0rd'

TEST_USER_EMAIL = 'user@test.com'
ANOTHER_USER_EMAIL = 'another_user@test.com'
TEST_ADMIN_EMAIL = 'admin@test.com'

TEST_SECRET_KEY = 'test-secret-key-for-the-restaurant-reservation-suite'
