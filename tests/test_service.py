import pytest

from isekaishop import entities, models
from isekaishop.exceptions import ItemCountingError, ItemListingError
from isekaishop.service import ItemShopService, total_pages


class FakeRepository:
    def __init__(self, items=(), count=0, listing_error=None, counting_error=None):
        self.items = list(items)
        self.count = count
        self.listing_error = listing_error
        self.counting_error = counting_error
        self.filters = []

    def listing(self, item_filter):
        self.filters.append(item_filter)
        if self.listing_error:
            raise self.listing_error
        return self.items

    def counting(self, item_filter):
        self.filters.append(item_filter)
        if self.counting_error:
            raise self.counting_error
        return self.count


def _entity(item_id, name):
    return entities.Item(id=item_id, name=name, description=f"{name} description",
                         picture=f"{name}.png", price=item_id * 10)


def _filter(page=1, size=5):
    return models.ItemFilter(paginate=models.Paginate(page=page, size=size))


def test_total_pages_exact_division():
    assert total_pages(10, 5) == 2


def test_total_pages_rounds_up():
    assert total_pages(11, 5) == 3


def test_total_pages_of_nothing():
    assert total_pages(0, 5) == 0


@pytest.mark.parametrize("total", range(0, 45, 7))
@pytest.mark.parametrize("size", [1, 3, 20])
def test_total_pages_holds_every_item(total, size):
    pages = total_pages(total, size)
    assert pages * size >= total
    assert max(pages - 1, 0) * size <= total


def test_total_pages_rejects_zero_size():
    with pytest.raises(ZeroDivisionError):
        total_pages(3, 0)


def test_listing_builds_result():
    stored = [_entity(1, "Sword"), _entity(2, "Shield")]
    repo = FakeRepository(items=stored, count=12)
    item_filter = _filter(page=2, size=5)

    result = ItemShopService(repo).listing(item_filter)

    assert result.items == [entity.to_item_model() for entity in stored]
    assert result.paginate.page == item_filter.paginate.page
    assert result.paginate.total_page == total_pages(12, 5)
    assert repo.filters == [item_filter, item_filter]


def test_listing_result_serialises():
    repo = FakeRepository(items=[_entity(3, "Potion")], count=1)
    data = ItemShopService(repo).listing(_filter()).to_dict()
    assert data["items"] == [_entity(3, "Potion").to_item_model().to_dict()]
    assert data["paginate"]["page"] == 1


def test_listing_with_no_items():
    result = ItemShopService(FakeRepository()).listing(_filter())
    assert result.items == []
    assert result.paginate.total_page == total_pages(0, 5)


def test_listing_error_propagates():
    repo = FakeRepository(listing_error=ItemListingError())
    with pytest.raises(ItemListingError):
        ItemShopService(repo).listing(_filter())
    assert len(repo.filters) == 1


def test_counting_error_propagates():
    repo = FakeRepository(items=[_entity(1, "Sword")], counting_error=ItemCountingError())
    with pytest.raises(ItemCountingError):
        ItemShopService(repo).listing(_filter())
    assert len(repo.filters) == 2