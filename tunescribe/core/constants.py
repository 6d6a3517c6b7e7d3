"""Global constants for tunescribe."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Audio processing defaults
DEFAULT_SR = 44100
DEFAULT_FRAME_SIZE = 2048
DEFAULT_HOP = 512
DEFAULT_ENERGY_GATE = 0.010  # slightly high, helps with mic noise

# Pitch search defaults
DEFAULT_FMIN = 65.0  # ~C2
DEFAULT_FMAX = 1200.0
DEFAULT_YIN_THRESHOLD = 0.12

# Musical defaults
DEFAULT_TEMPO = 120.0
DEFAULT_QUANTIZE_RESOLUTION = 16  # 16th notes

# MIDI
MIDI_MIN = 0
MIDI_MAX = 127
TICKS_PER_QUARTER = 480

# Rendering
WAVEFORMS = ("sine", "triangle", "sawtooth", "square")
PEAK_GAIN = 0.6
TAIL_PADDING = 0.5  # seconds of silence after the last note
