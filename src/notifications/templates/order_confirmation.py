"""Order confirmation template: sent when an order is placed."""

from datetime import UTC, datetime
from html import escape

from notifications.message import NotificationType


def format_amount(value) -> str:
    """Group thousands and drop a zero fraction: 1234.5 -> "1,234.5", 20 -> "20"."""
    return f"{float(value):,.2f}".rstrip("0").rstrip(".")


def _item_row(item: dict, currency: str) -> str:
    name = escape(str(item.get("name", "")))
    image_src = item.get("image_src") or ""
    image_cell = (
        f'<td style="padding-right:12px;">'
        f'<img src="{escape(image_src)}" alt="{name}" width="60" height="60" '
        f'style="display:block;border-radius:4px;object-fit:cover;"></td>'
        if image_src
        else ""
    )
    return (
        "<tr>"
        '<td style="padding:12px 0;border-bottom:1px solid #eee;">'
        '<table role="presentation" cellpadding="0" cellspacing="0"><tr>'
        f"{image_cell}"
        f'<td style="font:14px/20px Arial,sans-serif;color:#222;font-weight:600;">{name}</td>'
        "</tr></table></td>"
        f'<td align="center" style="padding:12px 0;border-bottom:1px solid #eee;">{item.get("quantity")}</td>'
        f'<td align="right" style="padding:12px 0;border-bottom:1px solid #eee;">'
        f"{currency} {format_amount(item.get('price', 0))}</td>"
        "</tr>"
    )


class OrderConfirmationTemplate:
    notification_type = NotificationType.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        tracking_id = context.get("tracking_id", "")
        currency = context.get("currency", "PKR")
        store_name = context.get("store_name", "The Ordnery")
        total = format_amount(context.get("total_price", 0))
        shipping_address = context.get("shipping_address") or "Not provided"
        track_link = f"{context.get('tracking_url', '')}/{tracking_id}"
        year = datetime.now(UTC).year

        rows = "".join(_item_row(item, currency) for item in context.get("items") or [])

        html_body = f"""<!doctype html>
<html>
<body style="margin:0;padding:0;background:#f6f7fb;">
  <table role="presentation" width="600" style="background:#ffffff;border:1px solid #e9e9ef;">
    <tr><td style="padding:0 28px;">
      <h2 style="font:700 22px/28px Arial,sans-serif;color:#111;">Order Placed Successfully!</h2>
      <p style="font:14px/20px Arial,sans-serif;color:#555;">
        Thank you for your purchase. Your order <strong>#{escape(str(order_id))}</strong> is now being processed.
      </p>
    </td></tr>
    <tr><td align="center" style="padding:0 28px 24px 28px;">
      <a href="{escape(track_link)}" style="padding:12px 18px;background:#000;color:#fff;">Track Order</a>
    </td></tr>
    <tr><td style="padding:0 28px;">
      <h3>Order Summary</h3>
      <table role="presentation" width="100%">
        <thead><tr><th align="left">Product</th><th align="center">Qty</th><th align="right">Price</th></tr></thead>
        <tbody>{rows}</tbody>
        <tfoot><tr>
          <td colspan="2" align="right">Total:</td>
          <td align="right">{currency} {total}</td>
        </tr></tfoot>
      </table>
    </td></tr>
    <tr><td style="padding:20px 28px 28px 28px;">
      <h3>Shipping Address</h3>
      <p style="margin:0;font:14px/20px Arial,sans-serif;color:#444;">{escape(shipping_address)}</p>
    </td></tr>
    <tr><td align="center" style="background:#f1f3f8;padding:16px;color:#888;">
      &copy; {year} {escape(store_name)}. All rights reserved.
    </td></tr>
  </table>
</body>
</html>"""

        return {
            "subject": f"Your Order Confirmation - #{order_id}",
            "body": (
                f"Thanks for your purchase! Order #{order_id}. "
                f"Track: {track_link}. "
                f"Total: {currency} {total}. "
                f"Ship to: {shipping_address}"
            ),
            "html_body": html_body,
        }
