MENTORSHIP_ENDPOINT = "/mentorship"
MENTORSHIP_STATS_ENDPOINT = "/mentorship/stats"
POTENTIAL_MENTORS_ENDPOINT = "/mentorship/potential-mentors"
MENTORSHIP_REQUESTS_ENDPOINT = "/mentorship/requests"
MENTORSHIP_RESPOND_ENDPOINT = "/mentorship/{mentorshipId}/respond"
MENTORSHIP_COMPLETE_ENDPOINT = "/mentorship/{mentorshipId}/complete"
MENTORSHIP_CANCEL_ENDPOINT = "/mentorship/{mentorshipId}/cancel"
MENTORSHIP_MEETINGS_ENDPOINT = "/mentorship/{mentorshipId}/meetings"
MENTORSHIP_MEETING_ENDPOINT = "/mentorship/{mentorshipId}/meetings/{meetingId}"
MENTORSHIP_GOAL_ENDPOINT = "/mentorship/{mentorshipId}/goals/{goalId}"
MENTORSHIP_NOTES_ENDPOINT = "/mentorship/{mentorshipId}/notes"
MENTORSHIP_FEEDBACK_ENDPOINT = "/mentorship/{mentorshipId}/feedback"

MY_MENTOR_PROFILE_ENDPOINT = "/profiles/mentor/me"
MENTOR_PROFILE_ENDPOINT = "/profiles/mentor/{userId}"
ACTIVE_MENTORS_ENDPOINT = "/profiles/mentors"
MY_MENTEE_PROFILE_ENDPOINT = "/profiles/mentee/me"
