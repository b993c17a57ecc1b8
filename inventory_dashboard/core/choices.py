"""Value sets shared by every screen. The inventory API enforces the same values."""

OFFICE_CHOICES = [
    ('Office 1', 'Office 1'),
    ('Office 2', 'Office 2'),
    ('Office 3', 'Office 3'),
]
OFFICES = [value for value, _ in OFFICE_CHOICES]
DEFAULT_OFFICE = 'Office 1'

ITEM_STATUS_CHOICES = [
    ('active', 'Active'),
    ('inactive', 'Inactive'),
    ('maintenance', 'Maintenance'),
    ('retired', 'Retired'),
]

ITEM_CATEGORY_CHOICES = [
    ('computers', 'Computers'),
    ('peripherals', 'Peripherals'),
    ('printer_items', 'Printer Items'),
]

MAKE_MODEL_CATEGORY_CHOICES = [
    ('computer', 'Computer'),
    ('peripheral', 'Peripheral'),
    ('printer', 'Printer'),
]
MAKE_MODEL_CATEGORIES = [value for value, _ in MAKE_MODEL_CATEGORY_CHOICES]

# Restock item category -> make/model lookup category
ITEM_CATEGORY_TO_MAKE_CATEGORY = {
    'computers': 'computer',
    'peripherals': 'peripheral',
    'printer_items': 'printer',
}

PRIORITY_CHOICES = [
    ('urgent', 'Urgent'),
    ('high', 'High'),
    ('normal', 'Normal'),
    ('low', 'Low'),
]

RESTOCK_STATUS_CHOICES = [
    ('pending', 'Pending'),
    ('approved', 'Approved'),
    ('ordered', 'Ordered'),
    ('received', 'Received'),
    ('cancelled', 'Cancelled'),
]

AUDIT_ACTION_CHOICES = [
    ('INSERT', 'Insert'),
    ('UPDATE', 'Update'),
    ('DELETE', 'Delete'),
]

PRINTER_ITEM_TYPES = [
    'Ink Cartridge',
    'Toner Cartridge',
    'Paper',
    'Printer Cable',
    'Maintenance Kit',
    'Drum Unit',
    'Fuser Unit',
    'Transfer Belt',
    'Other',
]


def choice_values(choices):
    return [value for value, _ in choices]


# Upper bound for item and restock quantities; one serial slot is rendered per unit
MAX_QUANTITY = 1000
