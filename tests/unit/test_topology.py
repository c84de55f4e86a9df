"""Unit tests for the topology data model and its queries."""

import pytest

from ifroute.errors import InterfaceNotFoundError, NodeNotFoundError
from ifroute.model.topology import (
    IfaceIndex,
    Interface,
    InterfaceType,
    Link,
    NodeId,
    Topology,
    TopologyNode,
)

N_A = NodeId(0xA)
N_B = NodeId(0xB)
N_C = NodeId(0xC)
IF_1 = IfaceIndex(1)
IF_2 = IfaceIndex(2)


def create_line_topology() -> Topology:
    """A(1) -- (1)B(2) -- (1)C"""
    node_a = TopologyNode(id=N_A)
    node_b = TopologyNode(id=N_B)
    node_c = TopologyNode(id=N_C)

    node_a.add_iface(Interface(id=IF_1, if_type=InterfaceType.LOCAL_NET, neighbors=[Link(N_B, IF_1)]))
    node_b.add_iface(Interface(id=IF_1, if_type=InterfaceType.LOCAL_NET, neighbors=[Link(N_A, IF_1)]))
    node_b.add_iface(Interface(id=IF_2, if_type=InterfaceType.LOCAL_NET, neighbors=[Link(N_C, IF_1)]))
    node_c.add_iface(Interface(id=IF_1, if_type=InterfaceType.LOCAL_NET, neighbors=[Link(N_B, IF_2)]))

    topo = Topology()
    topo.add_node(node_a)
    topo.add_node(node_b)
    topo.add_node(node_c)
    return topo


def create_line_topology_with_internet() -> Topology:
    """A(1) -- (1)B(2) -- (1)C(2) -- Internet"""
    topo = create_line_topology()
    topo.get_node_mut(N_C).add_iface(Interface(id=IF_2, if_type=InterfaceType.INTERNET))
    return topo


def create_line_topology_with_internet_2() -> Topology:
    """Internet -- (2)A(1) -- (1)B(2) -- (1)C(2) -- Internet"""
    topo = create_line_topology_with_internet()
    topo.get_node_mut(N_A).add_iface(Interface(id=IF_2, if_type=InterfaceType.INTERNET))
    return topo


class TestGateways:
    """Tests for find_internet_gateway."""

    def test_no_internet(self):
        topo = create_line_topology()
        assert topo.find_internet_gateway() == set()

    def test_one_gateway(self):
        topo = create_line_topology_with_internet()
        assert topo.find_internet_gateway() == {N_C}

    def test_two_gateways(self):
        topo = create_line_topology_with_internet_2()
        gateways = topo.find_internet_gateway()
        assert len(gateways) == 2
        assert gateways == {N_A, N_C}

    def test_node_with_two_internet_ifaces_counted_once(self):
        topo = create_line_topology_with_internet()
        topo.get_node_mut(N_C).add_iface(Interface(id=IfaceIndex(3), if_type=InterfaceType.INTERNET))
        assert topo.find_internet_gateway() == {N_C}


class TestAdjacentInterface:
    """Tests for get_adjacent_interface."""

    def test_line_topology(self):
        topo = create_line_topology()

        assert topo.get_adjacent_interface(N_A, IF_1, N_A) is None
        assert topo.get_adjacent_interface(N_A, IF_1, N_C) is None
        assert topo.get_adjacent_interface(N_A, IF_1, N_B) == IF_1
        assert topo.get_adjacent_interface(N_B, IF_2, N_C) == IF_1

    def test_all_pairs_with_internet(self):
        topo = create_line_topology_with_internet_2()

        assert topo.get_adjacent_interface(N_A, IF_1, N_A) is None
        assert topo.get_adjacent_interface(N_A, IF_2, N_A) is None
        assert topo.get_adjacent_interface(N_A, IF_1, N_B) == IF_1
        assert topo.get_adjacent_interface(N_A, IF_2, N_B) is None
        assert topo.get_adjacent_interface(N_A, IF_2, N_C) is None
        assert topo.get_adjacent_interface(N_A, IF_1, N_C) is None

        assert topo.get_adjacent_interface(N_B, IF_1, N_A) == IF_1
        assert topo.get_adjacent_interface(N_B, IF_2, N_A) is None
        assert topo.get_adjacent_interface(N_B, IF_1, N_B) is None
        assert topo.get_adjacent_interface(N_B, IF_2, N_B) is None
        assert topo.get_adjacent_interface(N_B, IF_2, N_C) == IF_1
        assert topo.get_adjacent_interface(N_B, IF_1, N_C) is None

        assert topo.get_adjacent_interface(N_C, IF_1, N_A) is None
        assert topo.get_adjacent_interface(N_C, IF_2, N_A) is None
        assert topo.get_adjacent_interface(N_C, IF_1, N_B) == IF_2
        assert topo.get_adjacent_interface(N_C, IF_2, N_B) is None
        assert topo.get_adjacent_interface(N_C, IF_1, N_C) is None
        assert topo.get_adjacent_interface(N_C, IF_2, N_C) is None

    def test_shared_segment(self):
        topo = create_line_topology()
        topo.get_node_mut(N_A).get_iface(IF_1).add_neighbor(N_C, IfaceIndex(7))

        assert topo.get_adjacent_interface(N_A, IF_1, N_B) == IF_1
        assert topo.get_adjacent_interface(N_A, IF_1, N_C) == IfaceIndex(7)

    def test_unknown_node(self):
        topo = create_line_topology()
        with pytest.raises(NodeNotFoundError) as exc_info:
            topo.get_adjacent_interface(NodeId(0xD), IF_1, N_A)
        assert exc_info.value.node_id == 0xD

    def test_unknown_interface(self):
        topo = create_line_topology()
        with pytest.raises(InterfaceNotFoundError) as exc_info:
            topo.get_adjacent_interface(N_A, IF_2, N_B)
        assert exc_info.value.node_id == N_A
        assert exc_info.value.iface_id == IF_2


class TestLocalInterfaces:
    """Tests for interface lookup by type."""

    def test_lookup_by_type(self):
        topo = create_line_topology_with_internet()
        topo.get_node_mut(N_C).add_iface(Interface(id=IfaceIndex(0), if_type=InterfaceType.LOCAL_APP))

        assert topo.get_local_iface_id_type(N_C, InterfaceType.LOCAL_NET) == IF_1
        assert topo.get_internet_iface_id(N_C) == IF_2
        assert topo.get_local_app_iface_id(N_C) == IfaceIndex(0)

    def test_missing_type(self):
        topo = create_line_topology()

        assert topo.get_local_app_iface_id(N_A) is None
        assert topo.get_internet_iface_id(N_B) is None

    def test_several_of_one_type(self):
        topo = create_line_topology()

        assert topo.get_local_iface_id_type(N_B, InterfaceType.LOCAL_NET) in {IF_1, IF_2}

    def test_unknown_node(self):
        topo = create_line_topology()
        with pytest.raises(NodeNotFoundError):
            topo.get_local_app_iface_id(NodeId(0xF))

    def test_local_net_ifaces(self):
        topo = create_line_topology_with_internet()
        assert topo.get_node(N_B).local_net_ifaces() == {IF_1, IF_2}
        assert topo.get_node(N_C).local_net_ifaces() == {IF_1}


class TestTopologyStore:
    """Tests for node storage and counters."""

    def test_get_node(self):
        topo = create_line_topology()
        node = topo.get_node(N_B)
        assert node.id == N_B
        assert set(node.ifaces) == {IF_1, IF_2}

    def test_get_node_mut_is_same_object(self):
        topo = create_line_topology()
        assert topo.get_node_mut(N_A) is topo.get_node(N_A)

    def test_unknown_node(self):
        topo = create_line_topology()
        with pytest.raises(NodeNotFoundError) as exc_info:
            topo.get_node(NodeId(0x1234))
        assert "0x1234" in str(exc_info.value)

    def test_add_node_replaces(self):
        topo = create_line_topology()
        topo.add_node(TopologyNode(id=N_B))

        assert topo.node_count == 3
        assert topo.get_node(N_B).ifaces == {}

    def test_add_iface_replaces(self):
        node = TopologyNode(id=N_A)
        node.add_iface(Interface(id=IF_1, if_type=InterfaceType.LOCAL_NET))
        node.add_iface(Interface(id=IF_1, if_type=InterfaceType.INTERNET))

        assert len(node.ifaces) == 1
        assert node.get_iface(IF_1).if_type == InterfaceType.INTERNET

    def test_counters(self):
        topo = create_line_topology_with_internet()

        assert topo.node_count == 3
        assert topo.interface_count == 5
        assert topo.link_count == 4

    def test_get_neighbors(self):
        topo = create_line_topology()

        assert topo.get_neighbors(N_A) == {N_B}
        assert topo.get_neighbors(N_B) == {N_A, N_C}

    def test_neighbor_links_not_validated_on_insert(self):
        topo = create_line_topology()
        topo.get_node_mut(N_A).get_iface(IF_1).add_neighbor(NodeId(0x99), IfaceIndex(9))

        assert topo.get_adjacent_interface(N_A, IF_1, NodeId(0x99)) == IfaceIndex(9)


class TestInterfaceValidation:
    """Tests for pydantic field bounds."""

    def test_iface_index_out_of_range(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            Interface(id=256, if_type=InterfaceType.LOCAL_NET)

    def test_interface_type_from_string(self):
        iface = Interface(id=1, if_type="local-app")
        assert iface.if_type == InterfaceType.LOCAL_APP
        assert iface.neighbors == []
