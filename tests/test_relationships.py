import pytest

from typescope import runtime
from typescope.relationships import (
    get_closed_generic_interfaces, implements_open_generic,
    is_assignable_to_open_generic, is_derived_from_open_generic,
    is_equivalent_to, is_same_or_inherits, is_under_namespace
)
from typescope.runtime import (
    DICTIONARY, ICOLLECTION, IDICTIONARY, IENUMERABLE, ILIST, INT32,
    KEY_VALUE_PAIR, LIST, NULLABLE, OBJECT, STRING
)

# --- Test Setup ---

# Open generic class hierarchy: Entity<TKey> <- Customer, Order<T> : Entity<T>
Entity = runtime.define_class('Entity', 'Shop', generic_parameters=['TKey'], is_abstract=True)
Entity.declare_property('Id', Entity.generic_arguments[0])
Customer = runtime.define_class('Customer', 'Shop', base_type=Entity.make_generic(INT32))
Customer.declare_property('Name', STRING)
Order = runtime.define_class('Order', 'Shop.Sales', generic_parameters=['T'])
Order.inherit(Entity.make_generic(Order.generic_arguments[0]))
VipCustomer = runtime.define_class('VipCustomer', 'Shop', base_type=Customer)
VipCustomer.declare_property('Name', STRING, is_override=True)
IntList = runtime.define_class('IntList', 'Shop', base_type=LIST.make_generic(INT32))
Unrelated = runtime.define_class('Unrelated', None)
Unrelated.declare_property('Name', STRING)

# --- is_same_or_inherits ---

@pytest.mark.parametrize("actual, expected, result", [
    (STRING, STRING, True),
    (STRING, OBJECT, True),
    (OBJECT, STRING, False),
    (VipCustomer, Customer, True),
    (VipCustomer, Entity.make_generic(INT32), True),
    (Customer, VipCustomer, False),
    (LIST.make_generic(INT32), IENUMERABLE.make_generic(INT32), True),
    (IntList, ICOLLECTION.make_generic(INT32), True),
    (IntList, ICOLLECTION.make_generic(STRING), False),
])
def test_is_same_or_inherits(actual, expected, result):
    assert is_same_or_inherits(actual, expected) is result

# --- Open generics ---

@pytest.mark.parametrize("actual, definition, result", [
    (LIST.make_generic(INT32), LIST, True),
    (INT32.make_array(), LIST, False),
    (LIST, LIST, True),
    (IntList, LIST, True),
    (Customer, Entity, True),
    (VipCustomer, Entity, True),
    (Order.make_generic(STRING), Entity, True),
    (STRING, LIST, False),
    (INT32, NULLABLE, False),
    (LIST.make_generic(INT32), IENUMERABLE, True),
    (IntList, ILIST, True),
    (ILIST.make_generic(STRING), ILIST, True),
    (ILIST.make_generic(STRING), IENUMERABLE, True),
    (LIST, IENUMERABLE, True),
    (STRING, IENUMERABLE, False),
    (DICTIONARY.make_generic(STRING, INT32), IDICTIONARY, True),
    (DICTIONARY.make_generic(STRING, INT32), LIST, False),
])
def test_is_assignable_to_open_generic(actual, definition, result):
    assert is_assignable_to_open_generic(actual, definition) is result

def test_type_is_never_derived_from_itself():
    assert is_derived_from_open_generic(LIST, LIST) is False
    assert is_derived_from_open_generic(Entity, Entity) is False

def test_is_derived_from_open_generic_walks_base_chain():
    assert is_derived_from_open_generic(VipCustomer, Entity) is True
    assert is_derived_from_open_generic(Order.make_generic(INT32), Entity) is True
    assert is_derived_from_open_generic(Unrelated, Entity) is False

def test_derived_from_open_generic_ignores_interfaces():
    """Implementing an interface instantiation does not count as deriving from it."""
    assert is_derived_from_open_generic(IntList, ILIST) is False
    assert implements_open_generic(IntList, ILIST) is True

def test_implements_open_generic_for_non_generic_type():
    assert implements_open_generic(Unrelated, IENUMERABLE) is False

# --- Closed interfaces ---

def test_get_closed_generic_interfaces_of_dictionary():
    dictionary = DICTIONARY.make_generic(STRING, INT32)
    pair = KEY_VALUE_PAIR.make_generic(STRING, INT32)
    assert get_closed_generic_interfaces(dictionary, ICOLLECTION) == (ICOLLECTION.make_generic(pair),)
    assert get_closed_generic_interfaces(dictionary, IENUMERABLE) == (IENUMERABLE.make_generic(pair),)

def test_get_closed_generic_interfaces_of_instantiation_itself():
    enumerable = IENUMERABLE.make_generic(STRING)
    assert get_closed_generic_interfaces(enumerable, IENUMERABLE) == (enumerable,)

def test_get_closed_generic_interfaces_none_found():
    assert get_closed_generic_interfaces(STRING, IENUMERABLE) == ()

# --- Members ---

def test_is_equivalent_to_for_member_redeclared_in_derived_type():
    base_name = Customer.declared_properties[0]
    derived_name = VipCustomer.declared_properties[0]
    assert is_equivalent_to(base_name, derived_name)
    assert is_equivalent_to(derived_name, base_name)

def test_is_equivalent_to_requires_related_types_and_same_name():
    assert not is_equivalent_to(Customer.declared_properties[0], Unrelated.declared_properties[0])
    assert not is_equivalent_to(Customer.declared_properties[0], Entity.make_generic(INT32).declared_properties[0])

# --- Namespaces ---

@pytest.mark.parametrize("namespace, candidate, result", [
    ('Shop', 'Shop', True),
    ('Shop.Sales', 'Shop', True),
    ('Shop.Sales', 'Shop.Sales', True),
    ('Shopping', 'Shop', False),
    ('Shop', 'Shop.Sales', False),
    ('Shop', None, True),
    (None, None, True),
    (None, 'Shop', False),
])
def test_is_under_namespace(namespace, candidate, result):
    tp = runtime.define_class('Probe', namespace)
    assert is_under_namespace(tp, candidate) is result

# --- Self-referencing generics ---

def test_closed_type_implements_interface_over_itself():
    money = runtime.define_class('Money', 'Shop', generic_parameters=['TCurrency'])
    money.implement(runtime.IEQUATABLE.make_generic(money.make_generic(*money.generic_arguments)))
    euros = money.make_generic(STRING)
    assert euros.interfaces == (runtime.IEQUATABLE.make_generic(euros),)
    assert is_same_or_inherits(euros, runtime.IEQUATABLE.make_generic(euros))
    assert not is_same_or_inherits(euros, runtime.IEQUATABLE.make_generic(money.make_generic(INT32)))
    assert get_closed_generic_interfaces(euros, runtime.IEQUATABLE) == (runtime.IEQUATABLE.make_generic(euros),)

# --- Arrays ---

@pytest.mark.parametrize("definition, result", [
    (IENUMERABLE, True),
    (ICOLLECTION, True),
    (ILIST, True),
    (LIST, False),
    (IDICTIONARY, False),
])
def test_array_is_assignable_to_collection_interfaces(definition, result):
    assert is_assignable_to_open_generic(INT32.make_array(), definition) is result

def test_array_inherits_closed_collection_interfaces():
    assert is_same_or_inherits(INT32.make_array(), IENUMERABLE.make_generic(INT32))
    assert not is_same_or_inherits(INT32.make_array(), IENUMERABLE.make_generic(STRING))
    assert not is_same_or_inherits(INT32.make_array(2), IENUMERABLE.make_generic(INT32))
    assert get_closed_generic_interfaces(STRING.make_array(), IENUMERABLE) == (IENUMERABLE.make_generic(STRING),)
