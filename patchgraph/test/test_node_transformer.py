import copy

from patchgraph.test.graphs import add_node_type, node_pins
from patchgraph.transformer import (
    OutLink,
    PinDestination,
    ProjectContext,
    transform,
    transform_to_dict,
    transformed_node,
)
from patchgraph.transformer.ir import Node
from patchgraph.transformer.node_transformer import node_out_links


class TestTransform:

    def test_empty_project(self):
        assert transform({}) == {}
        assert transform({"patches": {}, "nodeTypes": {}}) == {}

    def test_malformed_project_does_not_raise(self):
        assert transform(None) == {}
        assert transform({"patches": "junk", "nodeTypes": 7}) == {}

    def test_end_to_end(self, add_project):
        result = transform_to_dict(add_project)

        assert list(result) == ["n1", "n2"]
        assert result["n1"]["outLinks"] == [{"sum": {"nodeId": "n2", "key": "a"}}]
        assert result["n2"]["inputTypes"] == {"a": float, "b": float}
        assert result["n2"]["outLinks"] == []

    def test_behaviour_fields_pass_through(self, add_project):
        n1 = transform_to_dict(add_project)["n1"]
        assert n1 == {
            "id": "n1",
            "pure": True,
            "evaluate": "return {sum: inputs.a + inputs.b}",
            "inputTypes": {"a": float, "b": float},
            "outLinks": [{"sum": {"nodeId": "n2", "key": "a"}}],
        }
        assert "setup" not in n1

    def test_opaque_payloads_are_not_copied(self, add_project):
        setup = {"state": []}
        add_project["nodeTypes"]["add"]["setup"] = setup
        assert transform(add_project)["n1"].setup is setup

    def test_unknown_node_type(self, add_project):
        add_project["patches"]["main"]["nodes"]["n3"] = {"id": "n3", "typeId": "missing"}
        n3 = transform_to_dict(add_project)["n3"]
        assert n3 == {"id": "n3", "inputTypes": {}, "outLinks": []}

    def test_fan_out(self, fan_out_project):
        result = transform(fan_out_project)
        assert result["A"].out_links == [
            OutLink("sum", PinDestination(node_id="B", key="a")),
            OutLink("sum", PinDestination(node_id="C", key="b")),
        ]
        assert result["A"].to_dict()["outLinks"] == [
            {"sum": {"nodeId": "B", "key": "a"}},
            {"sum": {"nodeId": "C", "key": "b"}},
        ]

    def test_unlinked_output_is_absent(self, fan_out_project):
        result = transform_to_dict(fan_out_project)
        assert result["B"]["outLinks"] == []
        assert result["C"]["outLinks"] == []

    def test_outputs_follow_declared_pin_order(self):
        split = {
            "pins": {
                "hi": {"key": "hi", "direction": "output", "type": "number"},
                "lo": {"key": "lo", "direction": "output", "type": "number"},
                "in": {"key": "in", "direction": "input",  "type": "number"},
            },
        }
        pins = {}
        pins.update(node_pins("s", "hi", "lo", "in"))
        pins.update(node_pins("t", "a", "b", "sum"))
        project = {
            "patches": {"p": {
                "nodes": {
                    "s": {"id": "s", "typeId": "split"},
                    "t": {"id": "t", "typeId": "add"},
                },
                "pins": pins,
                "links": {
                    "l_lo": {"id": "l_lo", "pins": ["s_lo", "t_b"]},
                    "l_hi": {"id": "l_hi", "pins": ["s_hi", "t_a"]},
                },
            }},
            "nodeTypes": {"split": split, "add": add_node_type()},
        }
        assert transform_to_dict(project)["s"]["outLinks"] == [
            {"hi": {"nodeId": "t", "key": "a"}},
            {"lo": {"nodeId": "t", "key": "b"}},
        ]

    def test_dangling_link_keeps_empty_destination(self, add_project):
        add_project["patches"]["main"]["links"]["l1"]["pins"] = ["n1_sum", "gone"]
        assert transform_to_dict(add_project)["n1"]["outLinks"] == [{"sum": {}}]

    def test_nodes_linked_across_patches(self, add_project):
        main = add_project["patches"]["main"]
        add_project["patches"]["extra"] = {
            "id": "extra",
            "nodes": {"n3": {"id": "n3", "typeId": "add"}},
            "pins": node_pins("n3", "a", "b", "sum"),
            "links": {"l2": {"id": "l2", "pins": ["n2_sum", "n3_b"]}},
        }
        result = transform_to_dict(add_project)
        assert list(result) == ["n1", "n2", "n3"]
        assert result["n2"]["outLinks"] == [{"sum": {"nodeId": "n3", "key": "b"}}]
        assert "l1" in main["links"]

    def test_input_is_not_mutated(self, fan_out_project):
        before = copy.deepcopy(fan_out_project)
        transform(fan_out_project)
        assert fan_out_project == before

    def test_transformed_node_for_missing_pins(self, add_project):
        ctx = ProjectContext.from_project(add_project)
        orphan = Node(id="orphan", type_id="add")
        assert node_out_links(ctx, orphan) == []
        assert transformed_node(ctx, orphan).input_types == {"a": float, "b": float}
