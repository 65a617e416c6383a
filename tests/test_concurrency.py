import threading

from typescope import build_catalog, runtime, to_friendly_name
from typescope.runtime import DICTIONARY, INT32, LIST, STRING

THREADS = 16

def run_concurrently(target):
    """Start every thread at once and collect what each returned."""
    barrier = threading.Barrier(THREADS)
    results = [None] * THREADS

    def worker(index):
        barrier.wait()
        results[index] = target()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results

def test_concurrent_catalog_builds_agree():
    shipment = runtime.define_class('Shipment', 'Logistics')
    shipment.declare_property('Id', INT32)
    shipment.declare_property('Lines', LIST.make_generic(STRING))
    shipment.declare_field('Weight', INT32)

    results = run_concurrently(lambda: build_catalog(shipment))
    assert [m.name for m in results[0]] == ['Id', 'Lines', 'Weight']
    assert all(result is results[0] for result in results)

def test_concurrent_instantiation_interns_once():
    ledger = runtime.define_class('Ledger', 'Logistics', generic_parameters=['TKey', 'TValue'])
    results = run_concurrently(lambda: ledger.make_generic(STRING, DICTIONARY.make_generic(STRING, INT32)))
    assert all(result is results[0] for result in results)

def test_concurrent_derivation_of_closed_members():
    crate = runtime.define_class('Crate', 'Logistics', generic_parameters=['T'])
    crate.declare_property('Contents', crate.generic_arguments[0])
    closed = crate.make_generic(INT32)
    results = run_concurrently(lambda: closed.declared_properties[0])
    assert all(result is results[0] for result in results)
    assert results[0].value_type is INT32

def test_concurrent_friendly_names():
    closed = DICTIONARY.make_generic(STRING, LIST.make_generic(INT32))
    results = run_concurrently(lambda: to_friendly_name(closed))
    assert set(results) == {'Dictionary<string, List<int>>'}
