from __future__ import annotations

from html import escape
from string import Template

from hosting_functions.domain.dtos import OrderEmailRequest

ORDER_SUBJECT = Template("Potvrzení objednávky #${order_id} - ${plan_name}")

ORDER_HTML = Template(
    """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <style>
      body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
      .container { max-width: 600px; margin: 0 auto; padding: 20px; }
      .header { background: linear-gradient(135deg, #2563eb 0%, #1e40af 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }
      .content { background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px; }
      .order-details { background: white; padding: 20px; border-radius: 8px; margin: 20px 0; }
      .order-row { display: flex; justify-content: space-between; padding: 10px 0; border-bottom: 1px solid #e5e7eb; }
      .order-row:last-child { border-bottom: none; }
      .label { font-weight: bold; color: #6b7280; }
      .value { color: #111827; }
      .total { font-size: 1.2em; font-weight: bold; color: #2563eb; }
      .footer { text-align: center; padding: 20px; color: #6b7280; font-size: 0.9em; }
      .button { display: inline-block; background: #2563eb; color: white; padding: 12px 30px; text-decoration: none; border-radius: 6px; margin: 20px 0; }
    </style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>Děkujeme za vaši objednávku!</h1>
      </div>
      <div class="content">
        <p>Dobrý den ${customer_name},</p>
        <p>Vaše objednávka byla úspěšně přijata a je nyní zpracovávána.</p>

        <div class="order-details">
          <h2>Detail objednávky</h2>
          <div class="order-row">
            <span class="label">Číslo objednávky:</span>
            <span class="value">#${order_id}</span>
          </div>
          <div class="order-row">
            <span class="label">Hosting plán:</span>
            <span class="value">${plan_name}</span>
          </div>
          <div class="order-row">
            <span class="label">Cena:</span>
            <span class="value total">${price} Kč</span>
          </div>
        </div>

        <p>V nejbližší době vás budeme kontaktovat s dalšími instrukcemi pro:</p>
        <ul>
          <li>Provedení platby</li>
          <li>Nastavení hostingu</li>
          <li>Přístupové údaje do správy</li>
        </ul>

        <p style="text-align: center;">
          <a href="${dashboard_url}" class="button">Přejít do dashboardu</a>
        </p>

        <p>Pokud máte jakékoliv dotazy, neváhejte nás kontaktovat na <a href="mailto:${support_email}">${support_email}</a>.</p>

        <p>S pozdravem,<br><strong>Tým Alatyr Hosting</strong></p>
      </div>
      <div class="footer">
        <p>Tento email byl odeslán automaticky. Prosím neodpovídejte na něj.</p>
        <p>&copy; ${year} Alatyr Hosting. Všechna práva vyhrazena.</p>
      </div>
    </div>
  </body>
</html>
"""
)


def format_price(price: int | float | str) -> str:
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


def render_order_subject(order: OrderEmailRequest) -> str:
    return ORDER_SUBJECT.substitute(order_id=order.order_id, plan_name=order.plan_name)


def render_order_html(
    order: OrderEmailRequest,
    *,
    dashboard_url: str,
    support_email: str,
    year: int,
) -> str:
    """Render the order confirmation body; customer-supplied fields are escaped."""
    return ORDER_HTML.substitute(
        customer_name=escape(order.customer_name),
        order_id=escape(str(order.order_id)),
        plan_name=escape(order.plan_name),
        price=escape(format_price(order.price)),
        dashboard_url=escape(dashboard_url),
        support_email=escape(support_email),
        year=year,
    )
