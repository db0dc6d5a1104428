from src.guests.urls import API_PREFIX

DASHBOARD_URL = API_PREFIX + "/admin/dashboard"
STATS_URL = API_PREFIX + "/admin/stats"
