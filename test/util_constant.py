DEFAULT_PASSWORD = 'P@ssw0rd'

TEST_CUSTOMER_EMAIL = 'customer@test.com'
TEST_CUSTOMER_NAME = 'Test Customer'
ANOTHER_CUSTOMER_EMAIL = 'another_customer@test.com'
ANOTHER_CUSTOMER_NAME = 'Another Customer'
TEST_STAFF_EMAIL = 'staff@test.com'
TEST_STAFF_NAME = 'Test Staff'
TEST_MANAGER_EMAIL = 'manager@test.com'
TEST_MANAGER_NAME = 'Test Manager'
TEST_ADMIN_EMAIL = 'admin@test.com'
TEST_ADMIN_NAME = 'Test Admin'

# (id, name, capacity)
DEFAULT_TABLES = [
    (1, 'Table 1', 2),
    (2, 'Table 2', 4),
    (3, 'Table 3', 4),
    (4, 'Table 4', 6),
    (5, 'Table 5', 8),
]

TEST_DATE = '2024-06-01'
TEST_TIME = '18:00'
