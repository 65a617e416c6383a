import pytest

from typescope import (
    Accessibility, ResolutionStatus, build_catalog, clear_catalog_cache,
    find_field, find_methods, find_property, get_constructor,
    get_indexer_by_parameter_types, get_method, get_non_private_fields,
    get_non_private_members, get_non_private_properties,
    get_parameterless_method, get_property_by_name,
    has_explicitly_implemented_property, has_method, has_parameterless_method,
    is_indexer, resolve_field, resolve_property, runtime
)
from typescope.runtime import (
    DOUBLE, INT32, KEY_VALUE_PAIR, LIST, OBJECT, STRING, VALUE_TUPLES, VOID
)

# --- Test Setup ---

Base = runtime.define_class('Base', 'Shop')
Base.declare_property('Id', INT32)
Base.declare_property('Secret', STRING, getter=Accessibility.PROTECTED)
Base.declare_property('Hidden', STRING, getter=Accessibility.PRIVATE, setter=Accessibility.PUBLIC)
Base.declare_property('Internal', STRING, getter=Accessibility.INTERNAL)
Base.declare_property('Shared', STRING, is_static=True)
Base.declare_property('Item', STRING, index_parameters=[INT32])
Base.declare_field('Count', INT32)
Base.declare_field('_cache', STRING, accessibility=Accessibility.PRIVATE)
Base.declare_field('Tag', STRING, accessibility=Accessibility.PROTECTED)
Base.declare_field('Instances', INT32, is_static=True)

Derived = runtime.define_class('Derived', 'Shop', base_type=Base)
Derived.declare_property('Name', STRING)
Derived.declare_property('Id', INT32, is_override=True)

# Interface diamond: ID -> (IB, IC) -> IA
IA = runtime.define_interface('IA', 'Shop')
IA.declare_property('Id', INT32)
IB = runtime.define_interface('IB', 'Shop', extends=[IA])
IB.declare_property('B1', STRING)
IC = runtime.define_interface('IC', 'Shop', extends=[IA])
IC.declare_property('C1', STRING)
ID = runtime.define_interface('ID', 'Shop', extends=[IB, IC])
ID.declare_property('D1', STRING)

# "new" redeclaration with a different type
Holder = runtime.define_class('Holder', 'Shop')
Holder.declare_property('Value', OBJECT)
Holder.declare_property('Secretive', STRING, getter=Accessibility.PRIVATE)
Shadow = runtime.define_class('Shadow', 'Shop', base_type=Holder)
Shadow.declare_property('Value', STRING)

Animal = runtime.define_class('Animal', 'Zoo', is_abstract=True)
Animal.declare_method('Speak', return_type=STRING, is_virtual=True)
Animal.declare_method('Secret', return_type=VOID, accessibility=Accessibility.PRIVATE)
Animal.declare_method('Grow', return_type=VOID, accessibility=Accessibility.PROTECTED)
Animal.declare_method('Create', return_type=OBJECT, is_static=True)
Animal.declare_constructor()
Dog = runtime.define_class('Dog', 'Zoo', base_type=Animal)
Dog.declare_method('Speak', return_type=STRING, is_override=True)
Dog.declare_method('Feed', [INT32], return_type=VOID)
Dog.declare_method('Feed', [STRING], return_type=VOID)
Dog.declare_constructor([STRING])

def names(members):
    return [m.name for m in members]

# --- Catalog ---

def test_catalog_lists_properties_then_fields():
    assert names(build_catalog(Derived)) == ['Name', 'Id', 'Secret', 'Count', 'Tag']

def test_catalog_keeps_most_derived_declaration():
    catalog = {m.name: m for m in build_catalog(Derived)}
    assert catalog['Id'].declaring_type is Derived
    assert catalog['Secret'].declaring_type is Base

@pytest.mark.parametrize("excluded", ['Hidden', 'Internal', 'Shared', 'Item', '_cache', 'Instances'])
def test_catalog_excludes_unreadable_static_and_indexer_members(excluded):
    assert excluded not in names(build_catalog(Derived))

def test_name_filter_restricts_properties_only():
    assert names(build_catalog(Derived, ['Name'])) == ['Name', 'Count', 'Tag']
    assert names(build_catalog(Derived, [])) == ['Count', 'Tag']

def test_field_sharing_a_property_name_is_dropped():
    clash = runtime.define_class('Clash', 'Shop')
    prop = clash.declare_property('Value', INT32)
    clash.declare_field('Value', INT32)
    assert build_catalog(clash) == (prop,)

def test_type_without_members_has_empty_catalog():
    assert build_catalog(runtime.define_class('Empty', 'Shop')) == ()

def test_interface_diamond_visits_each_interface_once():
    catalog = build_catalog(ID)
    assert names(catalog) == ['Id', 'C1', 'B1', 'D1']
    assert names(catalog).count('Id') == 1

def test_catalog_of_closed_generics():
    pair = KEY_VALUE_PAIR.make_generic(STRING, INT32)
    assert [(m.name, m.value_type) for m in build_catalog(pair)] == [('Key', STRING), ('Value', INT32)]
    value_tuple = VALUE_TUPLES[1].make_generic(INT32, STRING)
    assert [(m.name, m.value_type) for m in build_catalog(value_tuple)] == [('Item1', INT32), ('Item2', STRING)]
    assert names(build_catalog(LIST.make_generic(INT32))) == ['Count']

def test_properties_and_fields_separately():
    assert names(get_non_private_properties(Derived)) == ['Name', 'Id', 'Secret']
    assert names(get_non_private_properties(Derived, ['Secret'])) == ['Secret']
    assert names(get_non_private_fields(Derived)) == ['Count', 'Tag']
    assert get_non_private_members(Derived) is build_catalog(Derived)

# --- Catalog cache ---

def test_catalog_is_memoized():
    assert build_catalog(Derived) is build_catalog(Derived)
    assert build_catalog(Derived, ['Name']) is build_catalog(Derived, ('Name',))
    assert build_catalog(Derived, ['Name']) is not build_catalog(Derived)

def test_clearing_cache_picks_up_new_declarations():
    growing = runtime.define_class('Growing', 'Shop')
    growing.declare_property('First', INT32)
    assert names(build_catalog(growing)) == ['First']
    growing.declare_property('Second', INT32)
    assert names(build_catalog(growing)) == ['First']
    clear_catalog_cache()
    assert names(build_catalog(growing)) == ['First', 'Second']

# --- Name lookups ---

def test_find_property_prefers_requested_type_on_clash():
    found = find_property(Shadow, 'Value', STRING)
    assert found is not None
    assert found.declaring_type is Shadow
    assert find_property(Shadow, 'Value', OBJECT).declaring_type is Holder

def test_find_property_ambiguity_is_reported():
    assert find_property(Shadow, 'Value', INT32) is None
    resolution = resolve_property(Shadow, 'Value')
    assert resolution.status is ResolutionStatus.AMBIGUOUS
    assert not resolution.found
    assert len(resolution.candidates) == 2

def test_find_property_missing_name():
    resolution = resolve_property(Shadow, 'Missing')
    assert resolution.status is ResolutionStatus.NOT_FOUND
    assert resolution.member is None
    assert find_property(Shadow, 'Missing') is None

def test_find_property_is_case_sensitive():
    assert find_property(Derived, 'name') is None
    assert find_property(Derived, 'Name').declaring_type is Derived

def test_find_property_single_candidate_ignores_preferred_type():
    assert find_property(Derived, 'Name', INT32) is not None

def test_find_property_skips_private_and_static_ancestors():
    assert find_property(Holder, 'Secretive') is not None
    assert find_property(Shadow, 'Secretive') is None
    assert find_property(Base, 'Shared') is None

def test_find_field():
    assert find_field(Derived, 'Count').declaring_type is Base
    assert find_field(Base, '_cache') is not None
    assert find_field(Derived, '_cache') is None
    assert resolve_field(Derived, 'Instances').status is ResolutionStatus.NOT_FOUND

def test_get_property_by_name_sees_every_property():
    assert get_property_by_name(Base, 'Shared').is_static
    assert get_property_by_name(Derived, 'Hidden').declaring_type is Base
    assert get_property_by_name(Derived, 'Id').declaring_type is Derived
    assert get_property_by_name(Base, 'Item') is None

# --- Indexers ---

def test_indexer_lookup_by_parameter_types():
    strings = LIST.make_generic(STRING)
    indexer = get_indexer_by_parameter_types(strings, [INT32])
    assert indexer is not None
    assert is_indexer(indexer)
    assert indexer.value_type is STRING
    assert get_indexer_by_parameter_types(strings, [STRING]) is None
    assert not is_indexer(get_property_by_name(strings, 'Count'))

# --- Methods ---

def test_get_method_returns_most_derived_override():
    assert get_method(Dog, 'Speak', []).declaring_type is Dog
    assert get_method(Animal, 'Speak', []).declaring_type is Animal

def test_get_method_hides_private_and_static_ancestor_methods():
    assert get_method(Dog, 'Secret', []) is None
    assert get_method(Animal, 'Secret', []) is not None
    assert get_method(Dog, 'Create', []) is None
    assert get_method(Animal, 'Create', []) is not None

def test_get_method_public_only():
    assert get_method(Dog, 'Grow', []) is not None
    assert get_method(Dog, 'Grow', [], public_only=True) is None

def test_method_lookup_matches_exact_parameters():
    assert has_method(Dog, 'Feed', [INT32])
    assert has_method(Dog, 'Feed', [STRING])
    assert not has_method(Dog, 'Feed', [DOUBLE])
    assert not has_method(Dog, 'Feed', [])

def test_parameterless_methods():
    assert has_parameterless_method(Dog, 'Speak')
    assert get_parameterless_method(Dog, 'Feed') is None
    assert not has_parameterless_method(Dog, 'Bark')

def test_find_methods_returns_every_overload():
    assert len(find_methods(Dog, 'Feed')) == 2
    equals = find_methods(Dog, 'Equals')
    assert len(equals) == 1
    assert equals[0].declaring_type is OBJECT

def test_constructors_are_declared_only_and_not_methods():
    ctor = get_constructor(Dog, [STRING])
    assert ctor is not None
    assert ctor.is_constructor
    assert get_constructor(Dog, []) is None
    assert get_constructor(Animal, []) is not None
    assert get_method(Dog, ctor.name, [STRING]) is None

def test_explicitly_implemented_property():
    shape = runtime.define_interface('IShape', 'Geometry')
    square = runtime.define_class('Square', 'Geometry', interfaces=[shape])
    square.declare_method('Geometry.IShape.get_Area', return_type=DOUBLE,
                          accessibility=Accessibility.PRIVATE, is_special_name=True)
    square.declare_method('Geometry.IShape.set_Label', [STRING], return_type=VOID,
                          accessibility=Accessibility.PRIVATE, is_special_name=True)
    assert has_explicitly_implemented_property(square, shape, 'Area')
    assert has_explicitly_implemented_property(square, shape, 'Label')
    assert not has_explicitly_implemented_property(square, shape, 'Perimeter')
