from math import pi as _PI

# =========================
# LANDMARKS
# =========================
WRIST = 0
FINGERTIPS = (4, 8, 12, 16, 20)    # thumb, index, middle, ring, pinky

# =========================
# GESTURE THRESHOLDS (normalised frame units)
# =========================
OPENNESS_THRESHOLD = 0.35   # mean wrist->tip distance above this = open hand
LOW_ZONE_Y = 0.7            # wrist below this line = hand low in frame
LEFT_ZONE_X = 0.3           # wrist left of this line = hand on the left
RIGHT_ZONE_X = 0.7          # wrist right of this line = hand on the right

# =========================
# EFFECTS
# =========================
IDLE_ROTATION_SPEED = 0.5
FAST_ROTATION_SPEED = 2.0
TURN_ROTATION_SPEED = 8.0
FAST_SNOW_MULTIPLIER = 3.0

# OrbitControls auto-rotate: speed 1.0 == one full orbit every 60 seconds
AUTO_ROTATE_RADIANS_PER_UNIT = 2.0 * _PI / 60.0

# =========================
# VISION MODEL
# =========================
HAND_LANDMARKER_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)
