# Default configuration for the virtual memory simulator

DEFAULT_MEMORY_SIZE = 1024  # Logical address space in bytes
DEFAULT_PAGE_SIZE = 64  # Size of a page/frame in bytes
DEFAULT_SEGMENT_NAMES = ("Code", "Data", "Stack")
DEFAULT_POLICY = "FIFO"

PAGE_SIZE_OPTIONS = [16, 32, 64, 128, 256, 512]  # Power of 2 sizes offered by the UI
MAX_MEMORY_SIZE = 65536

EVENT_LOG_TAIL = 20  # Number of log lines the UI shows
DEFAULT_ACCESS_SEQUENCE = "0:0, 0:70, 1:5, 2:100, 0:10, 1:300"
