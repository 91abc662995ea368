"""Application constants.

Column names, accepted flag values and the literals used when talking to
the sheet live here so the services never hard-code them.
"""

# Logical column names looked up in the header row (lowercase)
ID_COLUMN = "id"
EMAIL_COLUMN = "email"
USERNAME_COLUMN = "username"
TEAMNAME_COLUMN = "teamname"
TSHIRT_COLUMN = "tshirt"
CHECKED_COLUMN = "checked"
CHECKED_AT_COLUMN = "checked_at"

LOGICAL_COLUMNS = (
    ID_COLUMN,
    EMAIL_COLUMN,
    USERNAME_COLUMN,
    TEAMNAME_COLUMN,
    TSHIRT_COLUMN,
    CHECKED_COLUMN,
    CHECKED_AT_COLUMN,
)

# Raw values of the "checked" column that count as checked in (compared lowercase)
CHECKED_VALUES = frozenset({"true", "yes", "1", "checked"})

# Value written into the "checked" column (interpreted as a boolean by Sheets)
CHECKED_FLAG_VALUE = True

# Physical row number of the header row (Sheets rows are 1-based)
HEADER_ROW_NUMBER = 1
FIRST_DATA_ROW_NUMBER = HEADER_ROW_NUMBER + 1

# Identifier input constraints
MAX_IDENTIFIER_LENGTH = 100

# Google API scope needed to read and write cell values
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
