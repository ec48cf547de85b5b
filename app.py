"""
Virtual Memory Visualizer — Segmentation, Paging & Replacement

This application is the interactive front end of the simulation engine in
engine.py. It lets the user:
    - Configure memory size, page size, physical memory and segments
    - Access segment:offset addresses one at a time or as a sequence
    - Inspect the segment table, page table and frame table
    - Compare FIFO and LRU page replacement through fault statistics

Built with Streamlit for the web interface and Plotly for visualizations.
Run with: streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework

import config                                # Default simulation parameters
from engine import MemoryManager             # Core simulation engine
from errors import SimulationError
from replacement import ReplacementPolicy
from utils import (
    format_fault_rate,
    frame_figure,
    parse_access_sequence,
    parse_segment_names,
    stats_figure,
)


# Configure the Streamlit page
st.set_page_config(page_title="Virtual Memory Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

# Page selector for switching between Simulator and Concepts views
view = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Virtual Memory Visualizer — Segmentation, Paging & Replacement")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if view == "Concepts":
    st.header("How an address is translated")
    st.markdown(
        """
        ### **1. Segmentation**
        - The logical address space is split into equal segments (e.g. Code, Data, Stack).
        - Each segment has a *base* and a *limit*; an offset must satisfy `0 <= offset < limit`.
        - Logical address = `base + offset`. Bytes left over after the split belong to no segment.

        ### **2. Paging**
        - Page number = `logical // page_size`, page offset = `logical % page_size`.
        - The **Page Table** maps each page to a frame and carries a **valid bit**.
        - The **Frame Table** records which page occupies each physical frame.

        ### **3. Page Fault**
        - Accessing a page whose valid bit is clear is a *page fault*.
        - The page is loaded into the lowest free frame; if none is free, a victim is evicted.

        ### **4. Page Replacement**
        - **FIFO**: evict the page that was loaded first. Re-accessing a page does not save it.
        - **LRU**: evict the page that has gone unused the longest. Every access refreshes a page.

        ### **5. Physical Address**
        - Physical address = `frame * page_size + page_offset`.
        """
    )
    st.stop()  # Stop rendering - don't show simulator on Concepts page

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

memory_size = st.sidebar.number_input(
    "Logical memory (bytes)",
    min_value=1,
    max_value=config.MAX_MEMORY_SIZE,
    value=config.DEFAULT_MEMORY_SIZE,
)

page_size = st.sidebar.selectbox(
    "Page size (bytes)",
    options=config.PAGE_SIZE_OPTIONS,
    index=config.PAGE_SIZE_OPTIONS.index(config.DEFAULT_PAGE_SIZE),
)

# Physical memory smaller than logical memory forces replacement
physical_memory_size = st.sidebar.number_input(
    "Physical memory (bytes)",
    min_value=1,
    max_value=config.MAX_MEMORY_SIZE,
    value=config.DEFAULT_MEMORY_SIZE,
)

segment_text = st.sidebar.text_input(
    "Segment names (comma separated)",
    value=", ".join(config.DEFAULT_SEGMENT_NAMES),
)

policy = st.sidebar.selectbox(
    "Replacement Policy",
    options=list(ReplacementPolicy.ALL),
    index=list(ReplacementPolicy.ALL).index(config.DEFAULT_POLICY),
)

settings = (memory_size, page_size, physical_memory_size, segment_text, policy)

# -----------------------------------------------------------------------------
# SESSION STATE - Memory Manager Persistence
# -----------------------------------------------------------------------------

def build_manager():
    """Create a fresh manager from the sidebar settings and store it."""
    st.session_state.settings = settings
    st.session_state.manager = None
    st.session_state.config_error = None
    try:
        st.session_state.manager = MemoryManager(
            memory_size,
            page_size,
            parse_segment_names(segment_text),
            policy,
            physical_memory_size=physical_memory_size,
        )
    except SimulationError as e:
        st.session_state.config_error = str(e)


# Rebuild whenever the configuration changes; statistics start over
if st.session_state.get("settings") != settings:
    build_manager()

if st.sidebar.button("Reset Simulation"):
    build_manager()
    st.sidebar.success("Simulation reset")

if st.session_state.config_error:
    st.error(f"Invalid configuration: {st.session_state.config_error}")
    st.stop()

manager: MemoryManager = st.session_state.manager

st.sidebar.markdown("---")
st.sidebar.header("Access / Workload")

access_input = st.sidebar.text_area(
    "Access sequence (segment:offset, comma separated)",
    value=config.DEFAULT_ACCESS_SEQUENCE,
)

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Access Address")

    segment_labels = [f"{row['index']}: {row['name']}" for row in manager.list_segments()]
    seg_index = st.selectbox(
        "Segment", options=range(len(segment_labels)), format_func=lambda i: segment_labels[i]
    )
    seg_limit = manager.segments[seg_index].limit
    offset = st.number_input(f"Offset (0-{seg_limit - 1})", min_value=0, value=0)

    if st.button("Access"):
        try:
            result = manager.access(seg_index, int(offset))
            st.success(
                f"Logical {result.logical_address} -> Physical {result.physical_address} "
                f"(Page {result.page}, Frame {result.frame}, Offset {result.page_offset}) "
                f"{'FAULT' if result.faulted else 'HIT'}"
            )
        except SimulationError as e:
            st.error(str(e))

    if st.button("Run Sequence"):
        try:
            seq = parse_access_sequence(access_input)
        except ValueError as e:
            st.error(str(e))
            seq = []
        if not seq:
            st.warning("No addresses to run")
        else:
            faults = 0
            for seg, off in seq:
                try:
                    faults += manager.access(seg, off).faulted
                except SimulationError as e:
                    st.error(str(e))
            st.success(f"Sequence run finished ({faults} faults)")

    # Display event log (most recent events, newest first)
    st.subheader("Event Log")
    for ev in manager.event_log[-config.EVENT_LOG_TAIL:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    st.subheader("Physical Frames")
    frames = manager.list_frames()
    st.plotly_chart(frame_figure(frames), use_container_width=True)

    st.subheader("Page Table")
    st.table(manager.list_page_table())

    st.subheader("Frame Table")
    st.table(frames)

    st.subheader("Segmentation Table")
    st.table(manager.list_segments())

    st.subheader("Statistics")
    stats = manager.stats()
    st.metric("Accesses", stats["accesses"])
    st.metric("Page Faults", stats["page_faults"])
    st.metric("Fault Rate", format_fault_rate(stats["fault_rate"]))
    st.plotly_chart(stats_figure(stats), use_container_width=True)

    order_label = "oldest first" if manager.policy == ReplacementPolicy.FIFO else "most recent first"
    st.subheader(f"Replacement Order ({manager.policy}, {order_label})")
    st.write(manager.replacement_order())

# =============================================================================
# FOOTER - Usage Tips and Examples
# =============================================================================

st.markdown("---")
st.markdown(
    "**Instructor examples**:\n"
    "1) Logical=256, Page=64, Physical=128 → 4 pages, 2 frames. "
    "Sequence with one segment: `0:0, 0:64, 0:128` (page 0 is evicted under FIFO)\n"
    "2) LRU demo: same config, policy LRU, run `0:0, 0:64, 0:0, 0:128` (page 1 is evicted)"
)

# -----------------------------------------------------------------------------
# SIDEBAR - Debug Tools: Segment Translation
# -----------------------------------------------------------------------------

st.sidebar.markdown("---")
st.sidebar.header("Debug: Translate Segment")

# Preview a translation without touching the page table or statistics
trans_seg = st.sidebar.number_input("Translate seg index", min_value=0, value=0)
trans_off = st.sidebar.number_input("Offset (bytes)", min_value=0, value=0)

if st.sidebar.button("Translate"):
    try:
        page_no, page_off = manager.translate(int(trans_seg), int(trans_off))
        st.sidebar.success(f"Logical page {page_no}, offset {page_off}")
    except SimulationError as e:
        st.sidebar.error(str(e))
