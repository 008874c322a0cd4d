"""
Broadcast event names (wire contract shared by every transport binding)
"""

PRESENTATION_STARTING = "presentationStarting"
PRESENTATION_STARTED = "presentationStarted"
PRESENTATION_ENDED = "presentationEnded"
TIME_SYNC = "timeSync"
EVALUATION_FORM = "evaluationForm"
PRESENTATION_RESET = "presentationReset"

EVALUATION_SUBMITTED = "evaluationSubmitted"
TEAM_EVALUATIONS = "teamEvaluations"

# Sent only to the socket whose submission or event failed
EVALUATION_ERROR = "evaluationError"
EVENT_ERROR = "eventError"

# Events an admin may relay verbatim
LIFECYCLE_EVENTS = (
    PRESENTATION_STARTING,
    PRESENTATION_STARTED,
    PRESENTATION_ENDED,
    TIME_SYNC,
    EVALUATION_FORM,
    PRESENTATION_RESET,
)

BROADCAST_EVENTS = LIFECYCLE_EVENTS + (EVALUATION_SUBMITTED, TEAM_EVALUATIONS)
