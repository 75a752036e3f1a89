from app.analyzer.insight_summary import build_insight_prompt, build_insight_summary
from app.analyzer.report import SELLER_REPORT_TITLE, TEAM_REPORT_TITLE, build_report
from app.models.sales_models import KPITargets, SalesStatus


class TestInsightSummary:
    def test_gaps_and_average_ticket(self, make_sale, targets):
        sales = [
            make_sale(revenue=1500, mrr=1500, status=SalesStatus.SOLD_PAID),
            make_sale(revenue=3000, mrr=3000, status=SalesStatus.OPEN),
            make_sale(revenue=700, mrr=700, status=SalesStatus.CANCELLED),
        ]
        summary = build_insight_summary(sales, targets)

        assert summary.total_opportunities == 3
        assert summary.closed_count == 1
        assert summary.open_count == 1
        assert summary.cancelled_count == 1
        assert summary.revenue_gap == 44200 - 1500
        assert summary.mrr_gap == 7200 - 1500
        assert summary.average_ticket == 1500
        # revenue needs ceil(42700 / 1500) = 29, MRR needs ceil(5700 / 1500) = 4
        assert summary.sales_needed == 29

    def test_mrr_gap_can_dominate(self, make_sale):
        targets = KPITargets(revenue=1000, mrr=1000, conversion_rate=0.5, deals_closed=1)
        sales = [make_sale(revenue=1200, mrr=100)]
        summary = build_insight_summary(sales, targets)

        assert summary.revenue_gap < 0
        assert summary.sales_needed == 9

    def test_no_closed_sales(self, make_sale, targets):
        summary = build_insight_summary([make_sale(status=SalesStatus.OPEN)], targets)

        assert summary.average_ticket == 0
        assert summary.sales_needed == 0
        assert summary.conversion_rate == 0

    def test_prompt_carries_the_numbers(self, make_sale, targets):
        summary = build_insight_summary([make_sale(revenue=1500, mrr=1500)], targets)
        prompt = build_insight_prompt(summary)

        assert "Oportunidades Recebidas (Leads Totais): 1" in prompt
        assert "R$ 1500.00 (Meta: R$ 44200.00)" in prompt
        assert f"precisamos de mais {summary.sales_needed} vendas" in prompt
        assert "(Meta: 65.0%)" in prompt


class TestReport:
    def test_seller_report(self, make_sale, targets, seller):
        report = build_report(seller, [make_sale(seller_name="LUCAS")], targets)

        assert report.title == SELLER_REPORT_TITLE
        assert report.seller_name == "LUCAS"
        assert report.metrics.seller_ranking == []
        assert len(report.sales) == 1

    def test_team_report_includes_ranking(self, make_sale, targets, admin):
        sales = [make_sale(seller_name="LUCAS"), make_sale(seller_name="DAVI", revenue=5000)]
        report = build_report(admin, sales, targets, insight="texto")

        assert report.title == TEAM_REPORT_TITLE
        assert report.is_team_report
        assert report.metrics.seller_ranking[0].name == "DAVI"
        assert report.insight == "texto"
