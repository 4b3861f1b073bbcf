from tablenorm.utils.fp import count_where, curry, partition

def test_partition_keeps_order():
    odds, evens = partition(lambda x: x % 2 == 0, [1, 2, 3, 4, 5])
    assert odds == [1, 3, 5]
    assert evens == [2, 4]
    assert partition(bool, []) == ([], [])

def test_count_where():
    assert count_where(lambda s: s == "cell", ["cell", "image", "cell"]) == 2
    assert count_where(bool, []) == 0

def test_curry_partial_application():
    @curry
    def eq(a, b):
        return a == b
    assert eq(1)(1) and not eq(1)(2)
