from src.guests.urls import API_PREFIX

TABLES_URL = API_PREFIX + "/admin/tables"
TABLE_URL = TABLES_URL + "/{table_id}"

SEATING_URL = API_PREFIX + "/admin/seating"
ASSIGN_GUEST_URL = SEATING_URL + "/assign"
UNASSIGN_GUEST_URL = SEATING_URL + "/unassign"
