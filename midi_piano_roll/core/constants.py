"""Grid radix constants, MIDI ranges, zoom and export defaults."""

# Mixed radix of a piano roll position: bar.beat.subbeat.cent
BEATS_PER_BAR = 4
SUBBEATS_PER_BEAT = 4
CENTS_PER_SUBBEAT = 240

CENTS_PER_BEAT = SUBBEATS_PER_BEAT * CENTS_PER_SUBBEAT
CENTS_PER_BAR = BEATS_PER_BAR * CENTS_PER_BEAT

# MIDI value range for pitch, velocity
MIDI_MIN = 0
MIDI_MAX = 127
MIDI_CHANNEL_MAX = 15

# Horizontal zoom (pixels per beat)
DEFAULT_BEAT_WIDTH = 30.0
MIN_BEAT_WIDTH = 20.0
MAX_BEAT_WIDTH = 40.0

# Vertical zoom (pixels per row)
DEFAULT_ROW_HEIGHT = 40.0
MIN_ROW_HEIGHT = 30.0
MAX_ROW_HEIGHT = 80.0

# Pinch damping factor
DEFAULT_ZOOM_SPEED = 0.4


# Export
DEFAULT_TEMPO = 120.0
EXPORT_TICKS_PER_BEAT = 480
DEFAULT_VELOCITY = 100
