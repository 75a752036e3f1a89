import pytest

from app.core.errors import SaleNotFoundError
from app.models.sales_models import Periodicity, SaleDraft, SalesStatus
from app.services import sales_ledger


class TestSubmitSale:
    def test_create_assigns_id_seller_and_mrr(self, seller):
        draft = SaleDraft(
            customer_name="ACME",
            revenue=3600,
            periodicity="Trimestral",
            plan="Essencial",
        )
        sales, sale = sales_ledger.submit_sale([], draft, seller)

        assert sales == [sale]
        assert sale.id
        assert sale.seller_name == "LUCAS"
        assert sale.mrr == 1200.00
        assert sale.purchase_date == sale.date

    def test_create_defaults(self, seller):
        _, sale = sales_ledger.submit_sale([], SaleDraft(customer_name="", payment_method=""), seller)
        assert sale.customer_name == "Desconhecido"
        assert sale.payment_method == "Outro"
        assert sale.status == SalesStatus.OPEN

    def test_unknown_periodicity_is_stored_as_monthly(self, seller):
        draft = SaleDraft(revenue=900, periodicity="Bienal")
        _, sale = sales_ledger.submit_sale([], draft, seller)
        assert sale.periodicity == Periodicity.MONTHLY
        assert sale.mrr == 900

    def test_edit_overwrites_full_record_and_keeps_id(self, seller, make_sale):
        original = make_sale(id="abc", seller_name="BRUNA MONTEIRO", notes="old")
        other = make_sale(id="xyz")
        draft = SaleDraft.from_sale(original).model_copy(
            update={"revenue": 5000, "periodicity": "Anual", "plan": "Certificado", "notes": ""}
        )

        sales, sale = sales_ledger.submit_sale([original, other], draft, seller)

        assert [s.id for s in sales] == ["abc", "xyz"]
        assert sale.id == "abc"
        assert sale.mrr == 0
        assert sale.notes == ""
        assert sale.seller_name == "BRUNA MONTEIRO"

    def test_edit_without_seller_keeps_original_seller(self, seller, make_sale):
        original = make_sale(id="abc", seller_name="LUCAS")
        draft = SaleDraft(id="abc", customer_name="ACME", revenue=2500, status=SalesStatus.SOLD_PAID)

        sales, sale = sales_ledger.submit_sale([original], draft, seller)

        assert sale.seller_name == "LUCAS"
        assert sales[0].seller_name == "LUCAS"
        assert sale.customer_name == "ACME"

    def test_edit_cannot_reassign_seller(self, seller, make_sale):
        original = make_sale(id="abc", seller_name="BRUNA MONTEIRO")
        draft = SaleDraft.from_sale(original).model_copy(update={"seller_name": "DAVI"})

        _, sale = sales_ledger.submit_sale([original], draft, seller)

        assert sale.seller_name == "BRUNA MONTEIRO"

    def test_edit_of_missing_id(self, seller):
        with pytest.raises(SaleNotFoundError):
            sales_ledger.submit_sale([], SaleDraft(id="ghost"), seller)


class TestQuickEdits:
    def test_update_status_touches_only_status(self, make_sale):
        sale = make_sale(status=SalesStatus.OPEN, revenue=321)
        (updated,) = sales_ledger.update_status([sale], sale.id, SalesStatus.SOLD_PAID)

        assert updated.status == SalesStatus.SOLD_PAID
        assert updated.model_dump(exclude={"status"}) == sale.model_dump(exclude={"status"})

    def test_update_status_missing(self, make_sale):
        with pytest.raises(SaleNotFoundError):
            sales_ledger.update_status([make_sale()], "nope", SalesStatus.SOLD)

    def test_delete(self, make_sale):
        a, b = make_sale(), make_sale()
        assert sales_ledger.delete_sale([a, b], a.id) == [b]

    def test_delete_missing(self, make_sale):
        with pytest.raises(SaleNotFoundError):
            sales_ledger.delete_sale([make_sale()], "nope")


class TestSearch:
    def test_matches_customer_plan_and_seller(self, make_sale):
        sales = [
            make_sale(customer_name="Padaria Central", plan="Essencial"),
            make_sale(customer_id="ID-777", plan="Completo"),
            make_sale(plan="Controle", seller_name="JANAINA"),
        ]
        assert len(sales_ledger.search_sales(sales, "padaria")) == 1
        assert len(sales_ledger.search_sales(sales, "id-777")) == 1
        assert len(sales_ledger.search_sales(sales, "COMPLETO")) == 1
        assert len(sales_ledger.search_sales(sales, "jana")) == 1
        assert len(sales_ledger.search_sales(sales, "")) == 3
