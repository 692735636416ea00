"""
ReportForge Reporting - Built-in Default Template

Used for every report type that has no usable named template.
Self-contained: inline CSS only, no external fonts or images.
"""

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <style>
        body {
            font-family: Arial, Helvetica, sans-serif;
            margin: 0;
            padding: 20px;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
        }
        .watermark {
            position: fixed;
            top: 50%;
            left: 50%;
            transform: translate(-50%, -50%) rotate(-45deg);
            font-size: 120px;
            font-weight: bold;
            color: rgba(0, 0, 0, 0.05);
            z-index: -1;
            pointer-events: none;
        }
        .container {
            max-width: 800px;
            margin: 0 auto;
            background: white;
            padding: 40px;
            border-radius: 10px;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.2);
            position: relative;
        }
        .header {
            text-align: center;
            margin-bottom: 40px;
            border-bottom: 3px solid #667eea;
            padding-bottom: 20px;
        }
        .header h1 {
            color: #333;
            margin: 0;
            font-size: 28px;
        }
        .header p {
            color: #666;
            margin: 10px 0 0 0;
            font-size: 14px;
        }
        .meta-info {
            display: flex;
            justify-content: space-between;
            margin-bottom: 30px;
            padding: 15px;
            background: #f8f9fa;
            border-radius: 5px;
            border-left: 4px solid #667eea;
        }
        .meta-info div { text-align: center; }
        .meta-info strong { display: block; color: #333; font-size: 16px; }
        .meta-info span { color: #666; font-size: 12px; }
        .summary {
            display: flex;
            gap: 20px;
            margin-bottom: 30px;
        }
        .summary-card {
            flex: 1;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 20px;
            border-radius: 8px;
            text-align: center;
        }
        .summary-card h3 { margin: 0 0 10px 0; font-size: 24px; }
        .summary-card p { margin: 0; opacity: 0.9; font-size: 14px; }
        table {
            width: 100%;
            border-collapse: collapse;
            margin-top: 20px;
            font-size: 12px;
        }
        th, td {
            padding: 12px 8px;
            text-align: left;
            border-bottom: 1px solid #ddd;
        }
        th {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            text-transform: uppercase;
            font-size: 11px;
            letter-spacing: 0.5px;
        }
        tr { break-inside: avoid; }
        tr:nth-child(even) { background-color: #f8f9fa; }
        .empty {
            text-align: center;
            color: #666;
            padding: 30px 0;
        }
        .footer {
            margin-top: 40px;
            text-align: center;
            color: #666;
            font-size: 12px;
            border-top: 1px solid #ddd;
            padding-top: 20px;
        }
    </style>
</head>
<body>
    <div class="watermark">CONFIDENTIAL</div>
    <div class="container">
        <div class="header">
            <h1>{{ title }}</h1>
            {% if description %}<p>{{ description }}</p>{% endif %}
        </div>

        <div class="meta-info">
            <div><strong>{{ generated_date }}</strong><span>Generated Date</span></div>
            <div><strong>{{ generated_time }}</strong><span>Generated Time</span></div>
            <div><strong>{{ total_users }}</strong><span>Total Records</span></div>
        </div>

        <div class="summary">
            <div class="summary-card">
                <h3>{{ total_users }}</h3>
                <p>Total Employees</p>
            </div>
            <div class="summary-card">
                <h3 class="avg-salary">{{ avg_salary }}</h3>
                <p>Average Salary</p>
            </div>
        </div>

        {% if users %}
        <table>
            <thead>
                <tr>
                    <th>ID</th>
                    <th>Name</th>
                    <th>Email</th>
                    <th>Department</th>
                    <th>Position</th>
                    <th>Salary</th>
                    <th>Hire Date</th>
                </tr>
            </thead>
            <tbody>
                {% for user in users %}
                <tr>
                    <td>{{ user.id }}</td>
                    <td>{{ user.name }}</td>
                    <td>{{ user.email }}</td>
                    <td>{{ user.department }}</td>
                    <td>{{ user.position }}</td>
                    <td>{{ user.salary | format_currency }}</td>
                    <td>{{ user.hire_date }}</td>
                </tr>
                {% endfor %}
            </tbody>
        </table>
        {% else %}
        <p class="empty">No employee records matched this report.</p>
        {% endif %}

        <div class="footer">
            <p>This report was automatically generated by ReportForge</p>
        </div>
    </div>
</body>
</html>
"""
