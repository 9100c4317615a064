# obsportal/models/constants.py

PLACEHOLDER = "—"

NO_OBSERVATIONS_HTML = "<p class='text-center'>No observations yet!</p>"

# Text fields of the new-observation form, in the order they are rendered
OBSERVATION_TEXT_FIELDS = [
    "Observation_Class",
    "Observation_Strengths",
    "Observation_Weaknesses",
    "Observation_Comments",
]

# Keys the create endpoint has used for the new observation's id
NEW_ID_KEYS = ["Observation_ID", "id", "observation_id"]
