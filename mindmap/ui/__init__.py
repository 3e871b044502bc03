"""UI components for the Outline Mind Map application."""

from mindmap.ui.header import render_header
from mindmap.ui.sidebar import render_sidebar
from mindmap.ui.undo_redo import render_undo_redo
from mindmap.ui.node_list import render_node_list
from mindmap.ui.node_edit import render_node_edit
from mindmap.ui.logs import render_logs_section
from mindmap.ui.network_visualization import render_network_visualization
