API_PREFIX = "/api/v1"

# public
GET_RSVP_URL = API_PREFIX + "/rsvp/{token}"
UPDATE_RSVP_URL = API_PREFIX + "/rsvp/{token}"

# admin
GUESTS_URL = API_PREFIX + "/admin/guests"
GUEST_GROUPS_URL = GUESTS_URL + "/groups"
GUEST_URL = GUESTS_URL + "/{guest_id}"
RESEND_INVITATION_URL = GUEST_URL + "/resend-invitation"
