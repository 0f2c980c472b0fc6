"""
The 45-rule financial red-flag catalog.

Static configuration built once at import. Rule text is kept in the
Vietnamese used on filed statements. Entries without a check are
descriptive only: they have not been quantified yet and always resolve
to UNKNOWN.
"""

from typing import Dict, Tuple

from finrisk_gateway.domain import checks
from finrisk_gateway.domain.models import RiskGroup, RiskRule, Verdict

BS = RiskGroup.BALANCE_SHEET
PL = RiskGroup.INCOME_STATEMENT
CF = RiskGroup.CASH_FLOW
AN = RiskGroup.HORIZONTAL_VERTICAL_ANALYSIS

RISK = Verdict.RISK
WARNING = Verdict.WARNING


RULE_CATALOG: Tuple[RiskRule, ...] = (
    # I. Balance sheet
    RiskRule(1, BS, "Tiền và tương đương tiền", "Tăng đột biến nhưng doanh thu giảm",
             "Ghi nhận doanh thu ảo, điều chỉnh lợi nhuận",
             checks.cash_spike_with_falling_revenue, RISK),
    RiskRule(2, BS, "Tiền mặt lớn, ít gửi NH", "Nghi ngờ chi tiêu ngoài sổ, không qua ngân hàng",
             "Rủi ro chi tiêu không hóa đơn, quỹ đen."),
    RiskRule(3, BS, "Phải thu khách hàng", "Phải thu / Tổng tài sản > 40%",
             "Treo doanh thu, bán hàng chưa thu tiền",
             checks.receivables_share_of_assets, RISK),
    RiskRule(4, BS, "Tăng trưởng Phải thu vs Doanh thu", "Phải thu tăng >30% trong khi doanh thu giảm",
             "Ghi nhận doanh thu khống, đối ứng nội bộ",
             checks.receivables_growth_vs_revenue, RISK),
    RiskRule(5, BS, "Phải trả người bán", "Tăng mạnh, tồn kho không tương ứng",
             "Ghi nhận chi phí ảo hoặc dùng hóa đơn khống"),
    RiskRule(6, BS, "Phải thu – Phải trả", "Chênh lệch lớn, tăng bất thường",
             "Dấu hiệu “quay vòng chứng từ” nội bộ"),
    RiskRule(7, BS, "Hàng tồn kho", "Hàng tồn kho / Tổng tài sản > 50%",
             "Ghi nhận tồn khống để che lỗ hoặc không bán được hàng",
             checks.inventory_share_of_assets, RISK),
    RiskRule(8, BS, "Biến động Tồn kho vs Doanh thu", "Tồn kho giảm đột biến, doanh thu không tăng",
             "Xuất bán không kê khai doanh thu",
             checks.inventory_drop_without_sales, WARNING),
    RiskRule(9, BS, "TSCĐ vs Khấu hao", "TSCĐ tăng mạnh nhưng chi phí khấu hao không đổi",
             "Đầu tư ảo hoặc không ghi nhận đúng tài sản"),
    RiskRule(10, BS, "Tỷ lệ Khấu hao", "Chi phí khấu hao < 3% tổng TSCĐ",
             "Không ghi nhận đầy đủ khấu hao"),
    RiskRule(11, BS, "Vay ngắn hạn", "Tăng đột biến cuối năm",
             "Có thể “chuyển lợi nhuận” sang chi phí lãi vay"),
    RiskRule(12, BS, "Cấu trúc Nợ", "Nợ phải trả / VCSH > 3 lần",
             "Rủi ro mất khả năng thanh toán, sử dụng vốn vay nội bộ",
             checks.debt_to_equity, RISK),
    RiskRule(13, BS, "Cổ tức", "Lỗ lũy kế nhưng vẫn chia cổ tức",
             "Gian lận lợi nhuận hoặc chia không đúng luật",
             checks.payout_with_accumulated_losses, WARNING),
    RiskRule(14, BS, "Tài sản dở dang", "Kéo dài nhiều năm",
             "Dự án treo, có thể chuyển giá, ghi nhận sai kỳ"),
    RiskRule(15, BS, "Đầu tư tài chính", "Khoản lớn, nội bộ, không cổ tức",
             "Dấu hiệu chuyển giá, chuyển lợi nhuận"),
    # II. Income statement
    RiskRule(16, PL, "Biến động Doanh thu", "Tăng/giảm > 30% so năm trước",
             "Biến động bất thường so ngành hoặc địa bàn",
             checks.revenue_swing, WARNING),
    RiskRule(17, PL, "Doanh thu vs Giá vốn", "Doanh thu giảm nhưng giá vốn tăng",
             "Khai thiếu doanh thu, ghi sai kỳ"),
    RiskRule(18, PL, "Tỷ lệ Giá vốn", "Giá vốn > 95% doanh thu",
             "Ghi nhận chi phí không hợp lệ để giảm thuế TNDN",
             checks.cost_of_goods_share, RISK),
    RiskRule(19, PL, "Biên lợi nhuận gộp", "Biên LNG < 5% (trong ngành có lãi)",
             "Có thể khai sai doanh thu hoặc chi phí",
             checks.thin_gross_margin, WARNING),
    RiskRule(20, PL, "Chi phí bán hàng", "Tăng mạnh (>20%) bất thường",
             "Rủi ro ghi khống chi phí marketing, tiếp khách",
             checks.operating_expense_jump, WARNING),
    RiskRule(21, PL, "Chi phí quản lý", "> 15% doanh thu",
             "Không phù hợp quy mô hoạt động"),
    RiskRule(22, PL, "Lợi nhuận sau thuế", "Âm ≥ 2 năm liên tục",
             "DN vẫn hoạt động, dấu hiệu chuyển giá",
             checks.consecutive_losses, RISK),
    RiskRule(23, PL, "Thuế TNDN", "LN kế toán dương, thuế nộp thấp",
             "Điều chỉnh thuế sai, khai không đúng thu nhập chịu thuế"),
    RiskRule(24, PL, "Chi phí lãi vay", "Cao (>20% LN gộp)",
             "Vi phạm khống chế chi phí lãi vay (NĐ 132)"),
    RiskRule(25, PL, "Chi phí khác", "Tăng bất thường",
             "Ghi chi phí không hóa đơn, hoặc trích lập sai"),
    RiskRule(26, PL, "Chi phí nhân công", "Thấp bất hợp lý",
             "Khai giảm lương để né BHXH và PIT"),
    RiskRule(27, PL, "Thu nhập khác", "Lớn đột biến",
             "Thanh lý, nhượng bán TSCĐ có dấu hiệu điều chỉnh LN"),
    RiskRule(28, PL, "Tỷ suất LN Trước thuế", "LNTT < 1% doanh thu",
             "Dấu hiệu chuyển giá hoặc doanh thu ảo",
             checks.thin_pretax_margin, WARNING),
    RiskRule(29, PL, "Hoạt động", "Doanh thu = 0, Chi phí lớn",
             "DN “treo” hoạt động để trốn kê khai"),
    # III. Cash flow
    RiskRule(30, CF, "Chất lượng Lợi nhuận", "Dòng tiền HĐKD âm, LNST dương",
             "Doanh thu chưa thu tiền, ghi ảo",
             checks.profit_without_operating_cash, RISK),
    RiskRule(31, CF, "Dòng tiền Đầu tư", "Dương lớn (Bán TSCĐ)",
             "Bán tài sản bù lỗ hoạt động"),
    RiskRule(32, CF, "Dòng tiền Tài chính", "Vay nợ cao, trả gốc ít",
             "Có thể vay nội bộ, điều chuyển vốn"),
    RiskRule(33, CF, "Cổ tức tiền mặt", "Trả ra lớn trong khi lỗ",
             "Chia lợi nhuận không có thật"),
    RiskRule(34, CF, "Đầu tư vs Khấu hao", "Không đầu tư nhưng khấu hao cao",
             "Ghi nhận TSCĐ ảo"),
    RiskRule(35, CF, "Khả năng thanh toán", "Dòng tiền thuần âm 3 năm liền",
             "Dấu hiệu mất khả năng thanh toán, rủi ro thuế cao",
             checks.negative_cash_flow_three_years, RISK),
    # IV. Horizontal & vertical analysis
    RiskRule(36, AN, "Biến động Quý", "Doanh thu quý không ổn định",
             "Có thể điều chỉnh kỳ ghi nhận hóa đơn"),
    RiskRule(37, AN, "Tỷ trọng Chi phí", "Biến động > ±20%",
             "Khai không đồng nhất giữa các kỳ"),
    RiskRule(38, AN, "So sánh Ngành", "Biên LNG thấp hơn trung vị ngành > 50%",
             "Dấu hiệu gian lận giá vốn"),
    RiskRule(39, AN, "Cơ cấu Tài sản", "Tỷ trọng TSCĐ giảm mạnh",
             "Thanh lý hoặc ghi giảm TSCĐ không khai thuế"),
    RiskRule(40, AN, "Vòng quay Phải thu", "Phải thu / Doanh thu tăng > 2 lần",
             "Treo doanh thu",
             checks.receivables_to_revenue_doubling, RISK),
    RiskRule(41, AN, "Rủi ro Phá sản", "Nợ phải trả / Tài sản > 80%",
             "Rủi ro phá sản, chuyển giá",
             checks.debt_to_assets, RISK),
    RiskRule(42, AN, "Tồn kho ứ đọng", "Tồn kho / Doanh thu > 70%",
             "Không tiêu thụ hàng hoặc tồn khống",
             checks.inventory_to_revenue, RISK),
    RiskRule(43, AN, "Hiệu quả Vốn", "ROE < 5%",
             "Lợi nhuận thấp, nghi ngờ chuyển giá",
             checks.low_return_on_equity, WARNING),
    RiskRule(44, AN, "Hiệu quả Tài sản", "ROA < 2%",
             "Hiệu quả thấp bất thường",
             checks.low_return_on_assets, WARNING),
    RiskRule(45, AN, "Thanh khoản Nhanh", "Hệ số thanh toán nhanh < 0.5",
             "Mất cân đối tài chính nghiêm trọng",
             checks.low_quick_ratio, RISK),
)

RULES_BY_ID: Dict[int, RiskRule] = {rule.id: rule for rule in RULE_CATALOG}

GROUP_ORDER: Tuple[RiskGroup, ...] = (BS, PL, CF, AN)
