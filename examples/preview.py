# %%

# Interactive preview in VS Code with the OCP CAD Viewer extension.
# Cells are separated by "# %%"; run them with shift-enter.
# Needs the viewer extra: pip install -e ".[viewer]"

# %%

from ocp_vscode import set_defaults, set_port, show_object

from tubemount import PartKind, multiple_round, multiple_straight

set_port(3939)
set_defaults(reset_camera=False, helper_scale=5)

# %%

clamp = multiple_straight(20, [16, 20, 16], [25, 35])
bores = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.BORES)
show_object(clamp, name="clamp", options={"alpha": 0.6})
show_object(bores, name="bores", options={"color": "red"})

# %%

show_object(multiple_round([20, 16], 24), name="corner")
